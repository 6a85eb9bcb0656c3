"""Inbound HTTP listener for bridge callbacks.

The bridge pushes a JSON state object (bare, or wrapped in
``lastKnownState``) to every registered callback URL whenever the lock
changes state. Every request is acknowledged with an empty ``200``,
whatever its content; undecodable bodies are logged and dropped.
"""

from __future__ import annotations

import json
import logging

from aiohttp import web

from pynukilatch.accessory.reconciler import StateReconciler
from pynukilatch.exceptions import NukiProtocolError

_logger = logging.getLogger(__name__)


class WebhookReceiver:
    """Minimal aiohttp server forwarding callback payloads to the reconciler."""

    def __init__(self, reconciler: StateReconciler, *, host: str, port: int) -> None:
        self._reconciler = reconciler
        self._host = host
        self._port = port
        self._app = web.Application()
        self._app.router.add_route("*", "/{tail:.*}", self._handle)
        self._runner: web.AppRunner | None = None

    @property
    def app(self) -> web.Application:
        return self._app

    async def start(self) -> None:
        """Start listening on the configured host and port."""
        if self._runner is not None:
            return
        runner = web.AppRunner(self._app, access_log=None)
        await runner.setup()
        site = web.TCPSite(runner, self._host, self._port)
        await site.start()
        self._runner = runner
        _logger.info("Webhook receiver listening on %s:%s", self._host, self._port)

    async def stop(self) -> None:
        runner = self._runner
        self._runner = None
        if runner is not None:
            await runner.cleanup()

    async def _handle(self, request: web.Request) -> web.Response:
        body = await request.read()
        try:
            self.process(body)
        except NukiProtocolError as exc:
            _logger.error("Dropping callback from %s: %s", request.remote, exc)
        return web.Response(status=200)

    def process(self, body: bytes | str) -> None:
        """Decode one callback body and apply it.

        Raises
        ------
        NukiProtocolError
            The body is not a JSON object or does not match the state shape.
        """
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise NukiProtocolError(f"Callback body is not valid UTF-8: {body[:200]!r}") from exc
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise NukiProtocolError(f"Invalid JSON in callback: {body[:200]}") from exc
        if not isinstance(payload, dict):
            raise NukiProtocolError(f"Callback payload must be an object, got {type(payload).__name__}")
        self._reconciler.reconcile(payload)
