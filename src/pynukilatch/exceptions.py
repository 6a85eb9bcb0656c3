"""Custom exception hierarchy for pynukilatch."""

from __future__ import annotations


class NukiError(Exception):
    """Base exception for all pynukilatch errors."""


class NukiConfigError(NukiError):
    """Invalid or missing configuration."""


class NukiTransportError(NukiError):
    """HTTP-level failure (connection refused, non-200 status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class NukiProtocolError(NukiError):
    """Payload could not be decoded (invalid JSON or unexpected shape).

    Raised for replies from the bridge as well as for inbound webhook
    bodies; *endpoint* is empty for the latter.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class NukiActionRejectedError(NukiError):
    """Bridge answered a lock action with ``{"success": false}``."""

    def __init__(
        self,
        message: str,
        *,
        action: int | None = None,
        nuki_id: int | None = None,
    ) -> None:
        self.action = action
        self.nuki_id = nuki_id
        super().__init__(message)


class NukiDeviceNotFoundError(NukiError):
    """The configured ``nukiId`` is not paired with the bridge."""
