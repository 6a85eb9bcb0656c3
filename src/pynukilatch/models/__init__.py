"""Data models for Nuki bridge payloads and accessory values."""

from pynukilatch.models._base import NukiBaseModel, NukiEnum, safe_int, to_nuki_enum
from pynukilatch.models.accessory import ChargingState, ContactState, LockSurfaceState, LowBatteryStatus
from pynukilatch.models.device import Device, DoorSensorState, LastKnownState, LockAction, LockState
from pynukilatch.models.responses import ActionResponse, CallbackEntry, CallbackList

__all__ = [
    "ActionResponse",
    "CallbackEntry",
    "CallbackList",
    "ChargingState",
    "ContactState",
    "Device",
    "DoorSensorState",
    "LastKnownState",
    "LockAction",
    "LockState",
    "LockSurfaceState",
    "LowBatteryStatus",
    "NukiBaseModel",
    "NukiEnum",
    "safe_int",
    "to_nuki_enum",
]
