from __future__ import annotations

import asyncio
import logging

import pytest

from pynukilatch._constants import RELATCH_DELAY_SECONDS
from pynukilatch.accessory import AccessoryContext, ActionDispatcher, StateReconciler
from pynukilatch.client import NukiBridgeClient
from pynukilatch.config import NukiLatchConfig
from pynukilatch.models import Device, LockSurfaceState

from conftest import NUKI_ID, FakeBridgeBackend

S = LockSurfaceState


def _build(
    backend: FakeBridgeBackend,
    config: NukiLatchConfig,
    *,
    relatch_delay: float = 0.01,
) -> tuple[AccessoryContext, StateReconciler, ActionDispatcher]:
    context = AccessoryContext.in_memory(config.name)
    context.device = Device.model_validate({"nukiId": NUKI_ID, "name": "Front Door"})
    reconciler = StateReconciler(context)
    client = NukiBridgeClient(config, transport=backend)
    dispatcher = ActionDispatcher(client, context, reconciler, relatch_delay=relatch_delay)
    return context, reconciler, dispatcher


@pytest.mark.asyncio
async def test_lock_success_secures_lock_and_latch(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 5})

    assert await dispatcher.set_lock_target_state(S.SECURED) is True

    assert backend.calls_to("/lockAction") == [{"nukiId": NUKI_ID, "action": 2}]
    assert context.lock.as_tuple() == (S.SECURED, S.SECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)


@pytest.mark.asyncio
async def test_unlock_success_keeps_latch_secured(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 1})

    assert await dispatcher.set_lock_target_state(S.UNSECURED) is True

    assert backend.calls_to("/lockAction") == [{"nukiId": NUKI_ID, "action": 1}]
    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)


@pytest.mark.asyncio
async def test_rejected_lock_leaves_surfaces_and_acknowledges_host(
    backend: FakeBridgeBackend,
    config: NukiLatchConfig,
    caplog: pytest.LogCaptureFixture,
) -> None:
    backend.action_success = False
    backend.action_message = "busy"
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 3})
    acks: list[Exception | None] = []

    with caplog.at_level(logging.ERROR, logger="pynukilatch"):
        task = dispatcher.handle_lock_target_set(S.SECURED, acks.append)
        assert acks == [None]
        assert await task is False

    assert acks == [None]
    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)
    assert any("busy" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_transport_failure_is_logged_not_raised(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    backend.action_error = True
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 1})
    acks: list[Exception | None] = []

    assert await dispatcher.handle_latch_target_set(S.UNSECURED, acks.append) is False

    assert acks == [None]
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)
    assert dispatcher.pending_relatches == 0


@pytest.mark.asyncio
async def test_unlatch_schedules_one_relatch_after_default_delay(
    backend: FakeBridgeBackend,
    config: NukiLatchConfig,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    delays: list[float] = []
    real_sleep = asyncio.sleep

    async def _recording_sleep(delay: float, *args: object, **kwargs: object) -> None:
        delays.append(delay)
        await real_sleep(0)

    context, _, dispatcher = _build(backend, config, relatch_delay=RELATCH_DELAY_SECONDS)

    assert await dispatcher.set_latch_target_state(S.UNSECURED) is True
    assert context.lock.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert context.latch.as_tuple() == (S.UNSECURED, S.UNSECURED)
    assert dispatcher.pending_relatches == 1

    monkeypatch.setattr(asyncio, "sleep", _recording_sleep)
    for _ in range(5):
        await real_sleep(0)

    assert delays == [3.0]
    assert dispatcher.pending_relatches == 0
    assert context.latch.target_state is S.SECURED
    assert len(backend.calls_to("/lockAction")) == 1


@pytest.mark.asyncio
async def test_each_unlatch_gets_its_own_relatch(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, _, dispatcher = _build(backend, config, relatch_delay=0.05)

    await dispatcher.set_latch_target_state(S.UNSECURED)
    await asyncio.sleep(0.01)
    await dispatcher.set_latch_target_state(S.UNSECURED)

    assert dispatcher.pending_relatches == 2
    assert context.latch.target_state is S.UNSECURED

    await asyncio.sleep(0.2)

    assert dispatcher.pending_relatches == 0
    assert context.latch.target_state is S.SECURED
    assert [call["action"] for call in backend.calls_to("/lockAction")] == [3, 3]


@pytest.mark.asyncio
async def test_other_latch_targets_update_target_without_bridge_call(
    backend: FakeBridgeBackend,
    config: NukiLatchConfig,
) -> None:
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 5})

    assert await dispatcher.set_latch_target_state(S.SECURED) is True

    assert backend.calls_to("/lockAction") == []
    assert context.latch.as_tuple() == (S.SECURED, S.UNSECURED)


@pytest.mark.asyncio
async def test_no_device_means_no_bridge_call(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, _, dispatcher = _build(backend, config)
    context.device = None

    assert await dispatcher.set_lock_target_state(S.SECURED) is False

    assert backend.calls_to("/lockAction") == []


@pytest.mark.asyncio
async def test_close_cancels_pending_relatch(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, _, dispatcher = _build(backend, config, relatch_delay=10.0)

    await dispatcher.set_latch_target_state(S.UNSECURED)
    assert dispatcher.pending_relatches == 1

    await dispatcher.close()

    assert dispatcher.pending_relatches == 0
    assert context.latch.target_state is S.UNSECURED


@pytest.mark.asyncio
async def test_out_of_range_host_targets_still_acknowledge(backend: FakeBridgeBackend, config: NukiLatchConfig) -> None:
    context, reconciler, dispatcher = _build(backend, config)
    reconciler.reconcile({"state": 1})
    acks: list[Exception | None] = []

    lock_task = dispatcher.handle_lock_target_set(9, acks.append)
    latch_task = dispatcher.handle_latch_target_set(7, acks.append)

    assert acks == [None, None]
    assert await lock_task is False
    assert await latch_task is False
    assert backend.calls_to("/lockAction") == []
    assert context.lock.as_tuple() == (S.SECURED, S.SECURED)
    assert context.latch.as_tuple() == (S.SECURED, S.SECURED)
