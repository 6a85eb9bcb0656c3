"""Accessory-driven lock and latch actions.

Target-state writes from the accessory host are turned into bridge lock
actions. Surfaces are only moved once the bridge confirms the action;
rejected or failed actions are logged and leave every surface at its
previous value.

The host completion callback is always invoked with ``None``: failures
are never reported back to the accessory host.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pynukilatch._constants import RELATCH_DELAY_SECONDS
from pynukilatch.accessory.reconciler import StateReconciler
from pynukilatch.accessory.surfaces import AccessoryContext
from pynukilatch.client import NukiBridgeClient
from pynukilatch.exceptions import NukiError
from pynukilatch.models.accessory import LockSurfaceState
from pynukilatch.models.device import LockAction, LockState
from pynukilatch.models.responses import ActionResponse

_logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Exception | None], None]


class ActionDispatcher:
    """Dispatches lock/latch target-state requests to the bridge."""

    def __init__(
        self,
        client: NukiBridgeClient,
        context: AccessoryContext,
        reconciler: StateReconciler,
        *,
        relatch_delay: float = RELATCH_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._context = context
        self._reconciler = reconciler
        self._relatch_delay = relatch_delay
        self._relatch_tasks: set[asyncio.Task[bool]] = set()
        self._action_tasks: set[asyncio.Task[bool]] = set()

    @property
    def pending_relatches(self) -> int:
        """Number of scheduled re-latch tasks that have not fired yet."""
        return sum(1 for task in self._relatch_tasks if not task.done())

    # ------------------------------------------------------------------
    # Host-facing handlers
    # ------------------------------------------------------------------

    def handle_lock_target_set(
        self,
        target: LockSurfaceState | int,
        callback: CompletionCallback | None = None,
    ) -> asyncio.Task[bool]:
        """Schedule a lock target change and acknowledge the host immediately."""
        _logger.debug("setLockTargetState to: %s", target)
        return self._spawn(self.set_lock_target_state(target), callback)

    def handle_latch_target_set(
        self,
        target: LockSurfaceState | int,
        callback: CompletionCallback | None = None,
    ) -> asyncio.Task[bool]:
        """Schedule a latch target change and acknowledge the host immediately."""
        _logger.debug("setLatchTargetState to: %s", target)
        return self._spawn(self.set_latch_target_state(target), callback)

    def _spawn(
        self,
        coro: Awaitable[bool],
        callback: CompletionCallback | None,
    ) -> asyncio.Task[bool]:
        task: asyncio.Task[bool] = asyncio.ensure_future(coro)
        self._action_tasks.add(task)
        task.add_done_callback(self._action_tasks.discard)
        if callback is not None:
            callback(None)
        return task

    # ------------------------------------------------------------------
    # Lock axis
    # ------------------------------------------------------------------

    async def set_lock_target_state(self, target: LockSurfaceState | int) -> bool:
        """Lock or unlock; returns whether the bridge confirmed the action."""
        if target == LockSurfaceState.SECURED:
            return await self._run_action(LockAction.LOCK, self._client.lock, LockState.LOCKED)
        if target == LockSurfaceState.UNSECURED:
            # Unlocking never implies unlatching: the latch stays secured.
            return await self._run_action(LockAction.UNLOCK, self._client.unlock, LockState.UNLOCKED)
        _logger.debug("Ignoring lock target state: %s", target)
        return False

    # ------------------------------------------------------------------
    # Latch axis
    # ------------------------------------------------------------------

    async def set_latch_target_state(self, target: LockSurfaceState | int) -> bool:
        """Unlatch, or record any other latch target without a bridge call."""
        if target == LockSurfaceState.UNSECURED:
            confirmed = await self._run_action(LockAction.UNLATCH, self._client.unlatch, LockState.UNLATCHED)
            if confirmed:
                self._schedule_relatch()
            return confirmed

        try:
            latch_target = LockSurfaceState(target)
        except ValueError:
            _logger.debug("Ignoring latch target state: %s", target)
            return False
        self._context.latch.set_target_state(latch_target)
        return True

    def _schedule_relatch(self) -> None:
        # No debounce: every confirmed unlatch gets its own task.
        task = asyncio.ensure_future(self._relatch_after(self._relatch_delay))
        self._relatch_tasks.add(task)
        task.add_done_callback(self._relatch_tasks.discard)

    async def _relatch_after(self, delay: float) -> bool:
        await asyncio.sleep(delay)
        _logger.debug("Re-latching after %.1fs", delay)
        return await self.set_latch_target_state(LockSurfaceState.SECURED)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_action(
        self,
        action: LockAction,
        call: Callable[[int], Awaitable[ActionResponse]],
        confirmed_state: LockState,
    ) -> bool:
        nuki_id = self._context.nuki_id
        if nuki_id is None:
            _logger.error("Cannot %s: smart lock not discovered yet", action.name.lower())
            return False

        try:
            response = await call(nuki_id)
            response.raise_for_rejection(action=int(action), nuki_id=nuki_id)
        except NukiError as exc:
            _logger.error("%s failed for nukiId %s: %s", action.name.capitalize(), nuki_id, exc)
            return False

        self._reconciler.apply_lock_state(confirmed_state)
        return True

    async def close(self) -> None:
        """Cancel pending re-latch and action tasks (process shutdown)."""
        tasks: list[asyncio.Task[Any]] = [*self._relatch_tasks, *self._action_tasks]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._relatch_tasks.clear()
        self._action_tasks.clear()
