"""Device list endpoint.

Endpoint:
  - /list  (paired smart locks with their last known state)
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pynukilatch._constants import LIST_ENDPOINT
from pynukilatch._redact import redact_for_log
from pynukilatch._transport import Transport
from pynukilatch.exceptions import NukiProtocolError
from pynukilatch.models.device import Device

_logger = logging.getLogger(__name__)


async def fetch_device_list(transport: Transport) -> list[Device]:
    """Fetch all devices paired with the bridge."""
    decoded = await transport.get_json(LIST_ENDPOINT)
    _logger.debug("Devices loaded: %s", redact_for_log(decoded))

    if not isinstance(decoded, list):
        raise NukiProtocolError(
            f"{LIST_ENDPOINT} returned {type(decoded).__name__}, expected a list",
            endpoint=LIST_ENDPOINT,
        )
    try:
        return [Device.model_validate(item) for item in decoded]
    except ValidationError as exc:
        raise NukiProtocolError(f"Malformed device in {LIST_ENDPOINT}: {exc}", endpoint=LIST_ENDPOINT) from exc
