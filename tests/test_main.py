from __future__ import annotations

import pytest

from pynukilatch.__main__ import _overrides, _parse_args, main


def test_cli_options_become_config_overrides() -> None:
    args = _parse_args(["--bridge-host", "10.0.0.2", "--nuki-id", "7", "--callback-port", "9000"])

    assert _overrides(args) == {"bridge_host": "10.0.0.2", "nuki_id": 7, "callback_port": 9000}


def test_main_returns_error_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("NUKI_BRIDGE_HOST", "NUKI_BRIDGE_TOKEN", "NUKI_ID", "NUKI_CALLBACK_HOST"):
        monkeypatch.delenv(key, raising=False)

    assert main([]) == 1
