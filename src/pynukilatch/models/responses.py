"""Typed replies for bridge command endpoints.

``/lockAction`` and ``/callback/add`` answer with a small
``{"success": bool, "message": str}`` envelope; ``/callback/list``
returns the registered callback URLs.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pynukilatch.exceptions import NukiActionRejectedError
from pynukilatch.models._base import NukiBaseModel, safe_int


class ActionResponse(NukiBaseModel):
    """Acknowledgement returned by ``/lockAction`` and ``/callback/add``."""

    success: bool = False
    message: str | None = None
    battery_critical: bool | None = None

    def raise_for_rejection(self, *, action: int | None = None, nuki_id: int | None = None) -> None:
        """Raise :class:`NukiActionRejectedError` unless ``success`` is true."""
        if self.success:
            return
        raise NukiActionRejectedError(
            f"Action {action} rejected for nukiId {nuki_id}: {self.message or 'no message'}",
            action=action,
            nuki_id=nuki_id,
        )


class CallbackEntry(NukiBaseModel):
    """A callback URL registered with the bridge."""

    id: int | None = None
    url: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int | None:
        return safe_int(value)


class CallbackList(NukiBaseModel):
    """Reply of ``/callback/list``."""

    callbacks: list[CallbackEntry] = Field(default_factory=list)

    def contains(self, url: str) -> bool:
        return any(entry.url == url for entry in self.callbacks)
