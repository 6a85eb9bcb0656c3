"""pynukilatch - Nuki bridge lock, latch, door sensor and battery accessory core."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynukilatch")
except PackageNotFoundError:
    __version__ = "0+local"
from pynukilatch.accessory import (
    AccessoryContext,
    ActionDispatcher,
    BatterySurface,
    ContactSensorSurface,
    LockMechanismSurface,
    StateReconciler,
)
from pynukilatch.bridge import AccessoryInformation, NukiLatchBridge
from pynukilatch.client import NukiBridgeClient
from pynukilatch.config import NukiLatchConfig
from pynukilatch.exceptions import (
    NukiActionRejectedError,
    NukiConfigError,
    NukiDeviceNotFoundError,
    NukiError,
    NukiProtocolError,
    NukiTransportError,
)
from pynukilatch.models import (
    ActionResponse,
    CallbackList,
    ChargingState,
    ContactState,
    Device,
    DoorSensorState,
    LastKnownState,
    LockAction,
    LockState,
    LockSurfaceState,
    LowBatteryStatus,
)
from pynukilatch.webhook import WebhookReceiver

__all__ = [
    "__version__",
    "AccessoryContext",
    "AccessoryInformation",
    "ActionDispatcher",
    "ActionResponse",
    "BatterySurface",
    "CallbackList",
    "ChargingState",
    "ContactSensorSurface",
    "ContactState",
    "Device",
    "DoorSensorState",
    "LastKnownState",
    "LockAction",
    "LockMechanismSurface",
    "LockState",
    "LockSurfaceState",
    "LowBatteryStatus",
    "NukiActionRejectedError",
    "NukiBridgeClient",
    "NukiConfigError",
    "NukiDeviceNotFoundError",
    "NukiError",
    "NukiLatchBridge",
    "NukiLatchConfig",
    "NukiProtocolError",
    "NukiTransportError",
    "StateReconciler",
    "WebhookReceiver",
]
