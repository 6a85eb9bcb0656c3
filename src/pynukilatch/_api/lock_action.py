"""Lock action endpoint.

Endpoint:
  - /lockAction  (nukiId + action code; answers ``{"success": ...}``)

The bridge answers once the smart lock has acknowledged the command, so
``success`` reflects the lock's response rather than mere receipt.
"""

from __future__ import annotations

from pydantic import ValidationError

from pynukilatch._constants import LOCK_ACTION_ENDPOINT
from pynukilatch._transport import Transport
from pynukilatch.exceptions import NukiProtocolError
from pynukilatch.models.device import LockAction
from pynukilatch.models.responses import ActionResponse


async def send_lock_action(transport: Transport, nuki_id: int, action: LockAction) -> ActionResponse:
    """Issue a single lock action and return the parsed acknowledgement."""
    decoded = await transport.get_json(
        LOCK_ACTION_ENDPOINT,
        {"nukiId": nuki_id, "action": int(action)},
    )
    if not isinstance(decoded, dict):
        raise NukiProtocolError(
            f"{LOCK_ACTION_ENDPOINT} returned {type(decoded).__name__}, expected an object",
            endpoint=LOCK_ACTION_ENDPOINT,
        )
    try:
        return ActionResponse.model_validate(decoded)
    except ValidationError as exc:
        raise NukiProtocolError(
            f"Malformed reply from {LOCK_ACTION_ENDPOINT}: {exc}",
            endpoint=LOCK_ACTION_ENDPOINT,
        ) from exc
