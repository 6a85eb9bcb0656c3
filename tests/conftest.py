from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pynukilatch.config import NukiLatchConfig
from pynukilatch.exceptions import NukiTransportError

NUKI_ID = 123456789


@dataclass
class FakeBridgeBackend:
    """In-process stand-in for the bridge, implementing the transport protocol."""

    nuki_id: int = NUKI_ID
    last_known_state: dict[str, Any] = field(
        default_factory=lambda: {
            "mode": 2,
            "state": 1,
            "stateName": "locked",
            "batteryCritical": False,
            "batteryCharging": False,
            "batteryChargeState": 64,
            "doorsensorState": 2,
            "doorsensorStateName": "door closed",
            "timestamp": "2026-01-01T10:00:00+00:00",
        }
    )
    callbacks: list[str] = field(default_factory=list)
    callback_add_success: bool = True
    action_success: bool = True
    action_message: str | None = None
    action_error: bool = False
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def calls_to(self, endpoint: str) -> list[dict[str, Any]]:
        return [params for name, params in self.calls if name == endpoint]

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        query = dict(params or {})
        self.calls.append((endpoint, query))

        if endpoint == "/list":
            return [
                {
                    "deviceType": 0,
                    "nukiId": self.nuki_id,
                    "name": "Front Door",
                    "firmwareVersion": "3.4.5",
                    "lastKnownState": dict(self.last_known_state),
                }
            ]

        if endpoint == "/callback/list":
            return {"callbacks": [{"id": i, "url": url} for i, url in enumerate(self.callbacks)]}

        if endpoint == "/callback/add":
            if not self.callback_add_success:
                return {"success": False, "message": "too many callbacks registered"}
            self.callbacks.append(query["url"])
            return {"success": True}

        if endpoint == "/lockAction":
            if self.action_error:
                raise NukiTransportError("Request to /lockAction failed: connection refused", endpoint=endpoint)
            reply: dict[str, Any] = {"success": self.action_success, "batteryCritical": False}
            if self.action_message is not None:
                reply["message"] = self.action_message
            return reply

        raise AssertionError(f"unexpected endpoint {endpoint}")


@pytest.fixture
def backend() -> FakeBridgeBackend:
    return FakeBridgeBackend()


@pytest.fixture
def config() -> NukiLatchConfig:
    return NukiLatchConfig(
        bridge_host="192.168.1.20",
        token="secret-token",
        nuki_id=NUKI_ID,
        callback_host="192.168.1.10",
        callback_port=8890,
        relatch_delay=0.01,
    )
