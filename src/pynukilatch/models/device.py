"""Smart lock device and state models.

Fields are mapped from the bridge ``/list`` response and from the
callback payloads the bridge pushes to the webhook receiver.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, field_validator

from pynukilatch.models._base import NukiBaseModel, NukiEnum, safe_int, to_nuki_enum

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class LockState(NukiEnum):
    """Lock ``state`` codes reported by the bridge."""

    UNKNOWN = -1
    LOCKED = 1
    JAMMED = 2
    UNLOCKED = 3
    UNLATCHED = 5


class DoorSensorState(NukiEnum):
    """Door sensor ``doorsensorState`` codes reported by the bridge."""

    UNKNOWN = -1
    CLOSED = 2
    OPENED = 3


class LockAction(enum.IntEnum):
    """``action`` values accepted by ``/lockAction``."""

    UNLOCK = 1
    LOCK = 2
    UNLATCH = 3


# ------------------------------------------------------------------
# State snapshot
# ------------------------------------------------------------------


class LastKnownState(NukiBaseModel):
    """One state snapshot of a smart lock.

    Every field is optional: callbacks may carry partial updates, and a
    missing field means "no information" rather than "reset".
    """

    state: LockState | None = None
    """Lock mechanism state."""
    state_name: str | None = None
    """Human-readable state name (e.g. ``"locked"``)."""
    doorsensor_state: DoorSensorState | None = None
    """Door sensor state."""
    battery_critical: bool | None = None
    """Whether the battery level is critical."""
    battery_charging: bool | None = None
    """Whether the battery pack is charging."""
    battery_charge_state: int | None = None
    """Battery level in percent (0-100)."""
    timestamp: str | None = None
    """Time of the last state change as reported by the bridge."""

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_lock_state(cls, value: Any) -> LockState | None:
        return to_nuki_enum(LockState, value)

    @field_validator("doorsensor_state", mode="before")
    @classmethod
    def _coerce_door_state(cls, value: Any) -> DoorSensorState | None:
        return to_nuki_enum(DoorSensorState, value)

    @field_validator("battery_charge_state", mode="before")
    @classmethod
    def _coerce_charge_state(cls, value: Any) -> int | None:
        return safe_int(value)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> LastKnownState:
        """Parse a bare state object or a ``{"lastKnownState": {...}}`` envelope."""
        inner = payload.get("lastKnownState")
        if isinstance(inner, dict):
            return cls.model_validate(inner)
        return cls.model_validate(payload)


# ------------------------------------------------------------------
# Device
# ------------------------------------------------------------------


class Device(NukiBaseModel):
    """A smart lock paired with the bridge."""

    nuki_id: int = Field(default=0)
    """Vendor-assigned device identifier."""
    name: str = ""
    """Display name configured in the Nuki app."""
    device_type: int | None = None
    """Device type (``0`` = smart lock)."""
    firmware_version: str | None = None
    """Smart lock firmware version."""
    last_known_state: LastKnownState | None = None
    """Most recent state the bridge knows about."""

    @field_validator("nuki_id", mode="before")
    @classmethod
    def _coerce_nuki_id(cls, value: Any) -> int:
        parsed = safe_int(value)
        return parsed if parsed is not None else 0

    @field_validator("device_type", mode="before")
    @classmethod
    def _coerce_device_type(cls, value: Any) -> int | None:
        return safe_int(value)
