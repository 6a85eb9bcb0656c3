"""Accessory surfaces mutated by the reconciler and the dispatcher.

The accessory host owns the characteristics it exposes; the core only
calls the update operations declared by the sink protocols below. The
in-memory ``*Surface`` classes implement those protocols, keep the last
written values and forward every write to registered listeners, which is
how a host adapter mirrors them into its own characteristic objects.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from pynukilatch.models.accessory import ChargingState, ContactState, LockSurfaceState, LowBatteryStatus
from pynukilatch.models.device import Device

_logger = logging.getLogger(__name__)

SurfaceListener = Callable[[str, Any], None]
"""Called with ``(characteristic_name, value)`` after every write."""


class LockMechanismSink(Protocol):
    def set_target_state(self, state: LockSurfaceState) -> None: ...

    def set_current_state(self, state: LockSurfaceState) -> None: ...


class ContactSensorSink(Protocol):
    def set_contact_state(self, state: ContactState) -> None: ...


class BatterySink(Protocol):
    def set_battery_low(self, status: LowBatteryStatus) -> None: ...

    def set_charging(self, state: ChargingState) -> None: ...

    def set_level(self, level: int) -> None: ...


class _ObservableSurface:
    def __init__(self) -> None:
        self._listeners: list[SurfaceListener] = []

    def add_listener(self, listener: SurfaceListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _notify(self, characteristic: str, value: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(characteristic, value)
            except Exception:
                _logger.debug("Surface listener failed for %s", characteristic, exc_info=True)


class LockMechanismSurface(_ObservableSurface):
    """Target/current state pair of a lock mechanism (lock or latch)."""

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self.target_state = LockSurfaceState.UNKNOWN
        self.current_state = LockSurfaceState.UNKNOWN

    def set_target_state(self, state: LockSurfaceState) -> None:
        self.target_state = LockSurfaceState(state)
        self._notify("LockTargetState", self.target_state)

    def set_current_state(self, state: LockSurfaceState) -> None:
        self.current_state = LockSurfaceState(state)
        self._notify("LockCurrentState", self.current_state)

    def as_tuple(self) -> tuple[LockSurfaceState, LockSurfaceState]:
        """``(target, current)``."""
        return self.target_state, self.current_state

    def __repr__(self) -> str:
        return f"LockMechanismSurface({self.name!r}, target={self.target_state.name}, current={self.current_state.name})"


class ContactSensorSurface(_ObservableSurface):
    def __init__(self) -> None:
        super().__init__()
        self.contact_state: ContactState | None = None

    def set_contact_state(self, state: ContactState) -> None:
        self.contact_state = ContactState(state)
        self._notify("ContactSensorState", self.contact_state)


class BatterySurface(_ObservableSurface):
    def __init__(self) -> None:
        super().__init__()
        self.low_battery: LowBatteryStatus | None = None
        self.charging_state: ChargingState | None = None
        self.level: int | None = None

    def set_battery_low(self, status: LowBatteryStatus) -> None:
        self.low_battery = LowBatteryStatus(status)
        self._notify("StatusLowBattery", self.low_battery)

    def set_charging(self, state: ChargingState) -> None:
        self.charging_state = ChargingState(state)
        self._notify("ChargingState", self.charging_state)

    def set_level(self, level: int) -> None:
        self.level = level
        self._notify("BatteryLevel", level)


@dataclass
class AccessoryContext:
    """Everything the reconciler, dispatcher and webhook receiver share.

    Constructed once per accessory and passed explicitly to each component.
    ``device`` is filled in at startup once the bridge's device list has
    been loaded.
    """

    lock: LockMechanismSink
    latch: LockMechanismSink
    contact: ContactSensorSink
    battery: BatterySink
    device: Device | None = None

    @classmethod
    def in_memory(cls, name: str = "Nuki") -> AccessoryContext:
        """Build a context backed by the in-memory surfaces."""
        return cls(
            lock=LockMechanismSurface(name),
            latch=LockMechanismSurface(f"{name} latch"),
            contact=ContactSensorSurface(),
            battery=BatterySurface(),
        )

    @property
    def nuki_id(self) -> int | None:
        return self.device.nuki_id if self.device is not None else None
