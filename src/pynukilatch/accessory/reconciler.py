"""Deterministic mapping of bridge state snapshots onto accessory surfaces.

This is the only component allowed to translate vendor state codes into
surface values. Three independent axes are applied per snapshot:

- lock ``state`` → lock and latch surfaces (target and current together)
- ``doorsensorState`` → contact sensor
- battery flags and level → battery surface

A missing ``state`` or ``doorsensorState`` leaves its axis untouched.
Missing battery flags read as false; a missing level is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pynukilatch.accessory.surfaces import AccessoryContext, LockMechanismSink
from pynukilatch.exceptions import NukiProtocolError
from pynukilatch.models.accessory import ChargingState, ContactState, LockSurfaceState, LowBatteryStatus
from pynukilatch.models.device import Device, DoorSensorState, LastKnownState, LockState

_logger = logging.getLogger(__name__)

# (lock surface, latch surface) per recognised lock state.
_LOCK_STATE_MAP: dict[LockState, tuple[LockSurfaceState, LockSurfaceState]] = {
    LockState.LOCKED: (LockSurfaceState.SECURED, LockSurfaceState.SECURED),
    LockState.UNLOCKED: (LockSurfaceState.UNSECURED, LockSurfaceState.SECURED),
    LockState.UNLATCHED: (LockSurfaceState.UNSECURED, LockSurfaceState.UNSECURED),
    LockState.JAMMED: (LockSurfaceState.JAMMED, LockSurfaceState.JAMMED),
}

_DOOR_STATE_MAP: dict[DoorSensorState, ContactState] = {
    DoorSensorState.CLOSED: ContactState.DETECTED,
    DoorSensorState.OPENED: ContactState.NOT_DETECTED,
}


def _set_both(surface: LockMechanismSink, state: LockSurfaceState) -> None:
    surface.set_target_state(state)
    surface.set_current_state(state)


class StateReconciler:
    """Applies vendor snapshots to the surfaces held by an :class:`AccessoryContext`."""

    def __init__(self, context: AccessoryContext) -> None:
        self._context = context
        self.state_unknown = False
        self.last_lock_state: LockState | None = None

    @staticmethod
    def parse(snapshot: Mapping[str, Any] | Device | LastKnownState) -> LastKnownState:
        """Unwrap *snapshot* into a :class:`LastKnownState`.

        Accepts a raw payload (bare state or ``lastKnownState`` envelope),
        a :class:`Device` or an already parsed state.
        """
        if isinstance(snapshot, LastKnownState):
            return snapshot
        if isinstance(snapshot, Device):
            return snapshot.last_known_state or LastKnownState()
        if not isinstance(snapshot, Mapping):
            raise NukiProtocolError(f"State payload must be an object, got {type(snapshot).__name__}")
        try:
            return LastKnownState.from_payload(dict(snapshot))
        except ValidationError as exc:
            raise NukiProtocolError(f"Malformed state payload: {exc}") from exc

    def reconcile(self, snapshot: Mapping[str, Any] | Device | LastKnownState) -> LastKnownState:
        """Apply one vendor snapshot to all surfaces and return the parsed state."""
        state = self.parse(snapshot)
        _logger.debug("updateSmartLockState: %s", state.model_dump(exclude={"raw"}, exclude_none=True))

        if state.state is not None:
            self.apply_lock_state(state.state)
        self._apply_door_state(state.doorsensor_state)
        self._apply_battery(state)
        return state

    def apply_lock_state(self, lock_state: LockState) -> None:
        """Apply the lock axis only.

        Unrecognised codes are logged and flagged but leave the surfaces
        at their previous values.
        """
        mapped = _LOCK_STATE_MAP.get(lock_state)
        if mapped is None:
            _logger.warning("Unhandled lock state: %s", lock_state)
            self.state_unknown = True
            return

        lock_value, latch_value = mapped
        _set_both(self._context.lock, lock_value)
        _set_both(self._context.latch, latch_value)
        self.state_unknown = False
        self.last_lock_state = lock_state

    def _apply_door_state(self, door_state: DoorSensorState | None) -> None:
        if door_state is None:
            return
        contact = _DOOR_STATE_MAP.get(door_state)
        if contact is None:
            _logger.debug("Ignoring door sensor state: %s", door_state)
            return
        self._context.contact.set_contact_state(contact)

    def _apply_battery(self, state: LastKnownState) -> None:
        # A missing flag reads as false; only the level needs to be present.
        battery = self._context.battery
        battery.set_battery_low(LowBatteryStatus.LOW if state.battery_critical else LowBatteryStatus.NORMAL)
        battery.set_charging(ChargingState.CHARGING if state.battery_charging else ChargingState.NOT_CHARGING)
        if state.battery_charge_state is not None:
            battery.set_level(state.battery_charge_state)
