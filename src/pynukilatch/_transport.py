"""HTTP transport for the Nuki bridge API with token authentication."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pynukilatch._redact import redact_url
from pynukilatch.config import NukiLatchConfig
from pynukilatch.exceptions import NukiProtocolError, NukiTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`BridgeTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        ...


class BridgeTransport:
    """Issues authenticated GET requests against the bridge and decodes JSON.

    The bridge API is GET-only; the static token is appended to every
    request as a query parameter. No retry is applied and no timeout is set
    here; one configured on the session surfaces as
    :class:`NukiTransportError`.
    """

    def __init__(
        self,
        config: NukiLatchConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session

    def _build_params(self, params: Mapping[str, Any] | None) -> dict[str, str]:
        query: dict[str, str] = {"token": self._config.token}
        if params:
            for name, value in params.items():
                query[name] = str(value)
        return query

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET *endpoint* and return the decoded JSON body."""
        url = f"{self._config.base_url}{endpoint}"
        query = self._build_params(params)

        try:
            async with self._http.get(url, params=query) as resp:
                _logger.debug("GET %s -> %s", redact_url(str(resp.url)), resp.status)
                body = await resp.read()
                if resp.status != 200:
                    raise NukiTransportError(
                        f"HTTP {resp.status} from {endpoint}: {body[:200].decode(errors='replace')}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except NukiTransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NukiTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise NukiProtocolError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                endpoint=endpoint,
            ) from exc
