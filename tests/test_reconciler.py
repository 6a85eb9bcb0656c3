from __future__ import annotations

import logging

import pytest

from pynukilatch.accessory import AccessoryContext, StateReconciler
from pynukilatch.exceptions import NukiProtocolError
from pynukilatch.models import ChargingState, ContactState, Device, LockState, LockSurfaceState, LowBatteryStatus

S = LockSurfaceState


def _setup() -> tuple[AccessoryContext, StateReconciler]:
    context = AccessoryContext.in_memory("Front Door")
    return context, StateReconciler(context)


@pytest.mark.parametrize(
    ("code", "lock", "latch"),
    [
        (1, (S.SECURED, S.SECURED), (S.SECURED, S.SECURED)),
        (3, (S.UNSECURED, S.UNSECURED), (S.SECURED, S.SECURED)),
        (5, (S.UNSECURED, S.UNSECURED), (S.UNSECURED, S.UNSECURED)),
        (2, (S.JAMMED, S.JAMMED), (S.JAMMED, S.JAMMED)),
    ],
)
def test_lock_state_table(code: int, lock: tuple[S, S], latch: tuple[S, S]) -> None:
    context, reconciler = _setup()

    reconciler.reconcile({"state": code})

    assert context.lock.as_tuple() == lock
    assert context.latch.as_tuple() == latch
    assert reconciler.state_unknown is False


def test_jammed_does_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    _, reconciler = _setup()

    with caplog.at_level(logging.WARNING, logger="pynukilatch"):
        reconciler.reconcile({"state": 2})

    assert not caplog.records


def test_unrecognized_state_leaves_surfaces_untouched(caplog: pytest.LogCaptureFixture) -> None:
    context, reconciler = _setup()
    reconciler.reconcile({"state": 3})

    with caplog.at_level(logging.WARNING, logger="pynukilatch"):
        reconciler.reconcile({"state": 254})

    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)
    assert reconciler.state_unknown is True
    assert reconciler.last_lock_state is LockState.UNLOCKED
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_unrecognized_state_before_any_update_keeps_unknown() -> None:
    context, reconciler = _setup()

    reconciler.reconcile({"state": 7})

    assert context.lock.as_tuple() == (S.UNKNOWN, S.UNKNOWN)
    assert context.latch.as_tuple() == (S.UNKNOWN, S.UNKNOWN)


def test_door_sensor_only_payload_keeps_lock_surfaces() -> None:
    context, reconciler = _setup()
    reconciler.reconcile({"state": 5, "doorsensorState": 2})

    reconciler.reconcile({"doorsensorState": 3})

    assert context.contact.contact_state is ContactState.NOT_DETECTED
    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.latch.as_tuple() == (S.UNSECURED, S.UNSECURED)


def test_unknown_door_state_leaves_contact_unchanged() -> None:
    context, reconciler = _setup()
    reconciler.reconcile({"doorsensorState": 2})

    reconciler.reconcile({"doorsensorState": 4})

    assert context.contact.contact_state is ContactState.DETECTED


def test_full_payload() -> None:
    context, reconciler = _setup()

    reconciler.reconcile(
        {
            "state": 1,
            "doorsensorState": 2,
            "batteryCritical": False,
            "batteryCharging": True,
            "batteryChargeState": 80,
        }
    )

    assert context.lock.as_tuple() == (S.SECURED, S.SECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)
    assert context.contact.contact_state is ContactState.DETECTED
    assert context.battery.low_battery is LowBatteryStatus.NORMAL
    assert context.battery.charging_state is ChargingState.CHARGING
    assert context.battery.level == 80


def test_battery_critical_and_not_charging() -> None:
    context, reconciler = _setup()

    reconciler.reconcile({"batteryCritical": True, "batteryCharging": False, "batteryChargeState": 4})

    assert context.battery.low_battery is LowBatteryStatus.LOW
    assert context.battery.charging_state is ChargingState.NOT_CHARGING
    assert context.battery.level == 4


def test_last_known_state_envelope_is_unwrapped() -> None:
    context, reconciler = _setup()

    reconciler.reconcile({"nukiId": 1, "lastKnownState": {"state": 3, "doorsensorState": 3}})

    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.contact.contact_state is ContactState.NOT_DETECTED


def test_device_snapshot_primes_surfaces() -> None:
    context, reconciler = _setup()
    device = Device.model_validate({"nukiId": 1, "name": "Door", "lastKnownState": {"state": 1, "batteryChargeState": 55}})

    reconciler.reconcile(device)

    assert context.lock.as_tuple() == (S.SECURED, S.SECURED)
    assert context.battery.level == 55


def test_malformed_payload_raises_protocol_error() -> None:
    context, reconciler = _setup()

    with pytest.raises(NukiProtocolError):
        reconciler.reconcile({"state": 1, "batteryCritical": "sometimes"})

    assert context.lock.as_tuple() == (S.UNKNOWN, S.UNKNOWN)


def test_listener_sees_target_and_current_writes() -> None:
    context, reconciler = _setup()
    seen: list[tuple[str, object]] = []
    context.lock.add_listener(lambda name, value: seen.append((name, value)))

    reconciler.reconcile({"state": 1})

    assert seen == [("LockTargetState", S.SECURED), ("LockCurrentState", S.SECURED)]


def test_missing_battery_flags_reset_to_normal_and_not_charging() -> None:
    context, reconciler = _setup()
    reconciler.reconcile({"state": 1, "batteryCritical": True, "batteryCharging": True, "batteryChargeState": 9})

    reconciler.reconcile({"doorsensorState": 3})

    assert context.battery.low_battery is LowBatteryStatus.NORMAL
    assert context.battery.charging_state is ChargingState.NOT_CHARGING
    assert context.battery.level == 9
