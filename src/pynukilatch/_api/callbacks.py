"""Callback (webhook) registration endpoints.

Endpoints:
  - /callback/list  (registered callback URLs)
  - /callback/add   (register a new callback URL)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pynukilatch._constants import CALLBACK_ADD_ENDPOINT, CALLBACK_LIST_ENDPOINT
from pynukilatch._transport import Transport
from pynukilatch.exceptions import NukiProtocolError
from pynukilatch.models.responses import ActionResponse, CallbackList

_logger = logging.getLogger(__name__)


def _require_object(endpoint: str, decoded: Any) -> dict[str, Any]:
    if not isinstance(decoded, dict):
        raise NukiProtocolError(
            f"{endpoint} returned {type(decoded).__name__}, expected an object",
            endpoint=endpoint,
        )
    return decoded


async def fetch_callbacks(transport: Transport) -> CallbackList:
    """Fetch the callback URLs registered with the bridge."""
    decoded = _require_object(CALLBACK_LIST_ENDPOINT, await transport.get_json(CALLBACK_LIST_ENDPOINT))
    _logger.debug("Callbacks loaded: %s", decoded)
    try:
        return CallbackList.model_validate(decoded)
    except ValidationError as exc:
        raise NukiProtocolError(
            f"Malformed reply from {CALLBACK_LIST_ENDPOINT}: {exc}",
            endpoint=CALLBACK_LIST_ENDPOINT,
        ) from exc


async def add_callback(transport: Transport, url: str) -> ActionResponse:
    """Register *url* as a callback."""
    decoded = _require_object(
        CALLBACK_ADD_ENDPOINT,
        await transport.get_json(CALLBACK_ADD_ENDPOINT, {"url": url}),
    )
    try:
        return ActionResponse.model_validate(decoded)
    except ValidationError as exc:
        raise NukiProtocolError(
            f"Malformed reply from {CALLBACK_ADD_ENDPOINT}: {exc}",
            endpoint=CALLBACK_ADD_ENDPOINT,
        ) from exc
