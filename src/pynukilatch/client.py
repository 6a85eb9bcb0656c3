"""High-level async client for the Nuki bridge HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pynukilatch._api import callbacks as _callbacks_api
from pynukilatch._api import devices as _devices_api
from pynukilatch._api import lock_action as _lock_action_api
from pynukilatch._transport import BridgeTransport, Transport
from pynukilatch.config import NukiLatchConfig
from pynukilatch.exceptions import NukiDeviceNotFoundError, NukiError
from pynukilatch.models.device import Device, LockAction
from pynukilatch.models.responses import ActionResponse, CallbackList

_logger = logging.getLogger(__name__)


class NukiBridgeClient:
    """Async client for the Nuki bridge.

    Usage::

        async with NukiBridgeClient(config) as client:
            devices = await client.list_devices()
            await client.lock(devices[0].nuki_id)

    A pre-built *transport* may be passed instead of an HTTP session;
    tests use this to substitute a fake bridge.
    """

    def __init__(
        self,
        config: NukiLatchConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NukiBridgeClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None))
        self._transport = BridgeTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise NukiError("Client not initialized. Use 'async with NukiBridgeClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    async def list_devices(self) -> list[Device]:
        """Fetch all smart locks paired with the bridge."""
        _logger.debug("Loading devices…")
        return await _devices_api.fetch_device_list(self._require_transport())

    async def get_device(self, nuki_id: int) -> Device:
        """Return the paired device with *nuki_id*.

        Raises
        ------
        NukiDeviceNotFoundError
            No paired device has this id.
        """
        for device in await self.list_devices():
            if device.nuki_id == nuki_id:
                return device
        raise NukiDeviceNotFoundError(f"No smart lock with nukiId {nuki_id} is paired with the bridge")

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    async def list_callbacks(self) -> CallbackList:
        """Fetch the registered callback URLs."""
        _logger.debug("Loading callbacks…")
        return await _callbacks_api.fetch_callbacks(self._require_transport())

    async def register_webhook(self, url: str) -> bool:
        """Register *url* as a bridge callback unless it already is.

        Safe to call on every startup. Failures are logged and reported
        as ``False``; callback registration is not startup-critical.
        """
        try:
            registered = await self.list_callbacks()
            if registered.contains(url):
                _logger.debug("Callback %s already registered", url)
                return True

            response = await _callbacks_api.add_callback(self._require_transport(), url)
        except NukiError as exc:
            _logger.error("Callback %s register failed: %s", url, exc)
            return False

        if not response.success:
            _logger.error("Callback %s register failed: %s", url, response.message)
            return False

        _logger.debug("Callback %s successfully registered", url)
        return True

    # ------------------------------------------------------------------
    # Lock actions
    # ------------------------------------------------------------------

    async def lock_action(self, nuki_id: int, action: LockAction) -> ActionResponse:
        """Issue *action* against the smart lock *nuki_id*."""
        return await _lock_action_api.send_lock_action(self._require_transport(), nuki_id, action)

    async def lock(self, nuki_id: int) -> ActionResponse:
        """Lock the smart lock."""
        _logger.debug("Locking SmartLock with ID: %s", nuki_id)
        return await self.lock_action(nuki_id, LockAction.LOCK)

    async def unlock(self, nuki_id: int) -> ActionResponse:
        """Unlock the smart lock without releasing the latch."""
        _logger.debug("Unlocking SmartLock with ID: %s", nuki_id)
        return await self.lock_action(nuki_id, LockAction.UNLOCK)

    async def unlatch(self, nuki_id: int) -> ActionResponse:
        """Unlock the smart lock and pull the latch."""
        _logger.debug("Unlocking and unlatching SmartLock with ID: %s", nuki_id)
        return await self.lock_action(nuki_id, LockAction.UNLATCH)
