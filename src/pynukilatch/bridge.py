"""Wires the client, accessory surfaces and webhook receiver together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from pynukilatch._transport import Transport
from pynukilatch.accessory.dispatcher import ActionDispatcher
from pynukilatch.accessory.reconciler import StateReconciler
from pynukilatch.accessory.surfaces import AccessoryContext
from pynukilatch.client import NukiBridgeClient
from pynukilatch.config import NukiLatchConfig
from pynukilatch.models.device import Device
from pynukilatch.webhook import WebhookReceiver

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessoryInformation:
    """Static identification reported to the accessory host."""

    manufacturer: str
    model: str
    firmware_revision: str


class NukiLatchBridge:
    """Lifecycle owner for one exposed smart lock.

    Startup order: open the client, start the webhook receiver, register
    the webhook with the bridge, load the device list and prime the
    surfaces from the configured lock's last known state.

    Usage::

        async with NukiLatchBridge(config) as bridge:
            bridge.dispatcher.handle_lock_target_set(LockSurfaceState.SECURED, callback)
    """

    def __init__(
        self,
        config: NukiLatchConfig,
        *,
        context: AccessoryContext | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.config = config
        self.context = context or AccessoryContext.in_memory(config.name)
        self.client = NukiBridgeClient(config, session=session, transport=transport)
        self.reconciler = StateReconciler(self.context)
        self.dispatcher = ActionDispatcher(
            self.client,
            self.context,
            self.reconciler,
            relatch_delay=config.relatch_delay,
        )
        self.receiver = WebhookReceiver(
            self.reconciler,
            host=config.listen_host,
            port=config.callback_port,
        )
        self._started = False

    async def __aenter__(self) -> NukiLatchBridge:
        try:
            await self.start()
        except BaseException:
            await self.stop()
            raise
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    @staticmethod
    def accessory_information() -> AccessoryInformation:
        from pynukilatch import __version__

        return AccessoryInformation(
            manufacturer="pynukilatch",
            model="NukiLatch",
            firmware_revision=__version__,
        )

    async def start(self, *, serve_webhook: bool = True) -> Device:
        """Start all components and return the discovered device.

        Raises
        ------
        NukiDeviceNotFoundError
            The configured ``nuki_id`` is not paired with the bridge.
        NukiTransportError, NukiProtocolError
            The device list could not be loaded.
        """
        await self.client.__aenter__()
        self._started = True
        if serve_webhook:
            await self.receiver.start()

        await self.client.register_webhook(self.config.webhook_url)

        device = await self.client.get_device(self.config.nuki_id)
        self.context.device = device
        _logger.info("Exposing smart lock %r (nukiId %s)", device.name, device.nuki_id)
        self.reconciler.reconcile(device)
        return device

    async def stop(self) -> None:
        """Cancel timers, stop the receiver and close the client."""
        if not self._started:
            return
        self._started = False
        await self.dispatcher.close()
        await self.receiver.stop()
        await self.client.__aexit__(None, None, None)
