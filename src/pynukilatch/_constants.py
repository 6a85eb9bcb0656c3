"""Internal constants shared across the library."""

DEFAULT_BRIDGE_PORT = 8080
DEFAULT_CALLBACK_PORT = 8890
DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_NAME = "Nuki"

# ------------------------------------------------------------------
# Bridge HTTP API endpoints
# ------------------------------------------------------------------

LIST_ENDPOINT = "/list"
CALLBACK_LIST_ENDPOINT = "/callback/list"
CALLBACK_ADD_ENDPOINT = "/callback/add"
LOCK_ACTION_ENDPOINT = "/lockAction"

# ------------------------------------------------------------------
# Latch auto-relock
# ------------------------------------------------------------------

#: Seconds after a confirmed unlatch before the latch target is
#: requested back to secured.
RELATCH_DELAY_SECONDS: float = 3.0
