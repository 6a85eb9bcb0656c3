"""Bridge configuration for pynukilatch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pynukilatch._constants import (
    DEFAULT_BRIDGE_PORT,
    DEFAULT_CALLBACK_PORT,
    DEFAULT_LISTEN_HOST,
    DEFAULT_NAME,
    RELATCH_DELAY_SECONDS,
)
from pynukilatch.exceptions import NukiConfigError

_REQUIRED_ENV = {
    "NUKI_BRIDGE_HOST": "bridge_host",
    "NUKI_BRIDGE_TOKEN": "token",
    "NUKI_ID": "nuki_id",
    "NUKI_CALLBACK_HOST": "callback_host",
}


@dataclasses.dataclass(frozen=True)
class NukiLatchConfig:
    """Bridge configuration.

    Parameters
    ----------
    bridge_host : str
        Hostname or IP address of the Nuki bridge on the local network.
    token : str
        Static API token configured in the Nuki app. Appended to every
        request as the ``token`` query parameter.
    nuki_id : int
        ``nukiId`` of the smart lock to expose.
    callback_host : str
        Address the bridge should use to reach the webhook receiver.
    bridge_port : int
        HTTP port of the bridge API.
    callback_port : int
        Port the webhook receiver listens on (and the port registered
        with the bridge).
    listen_host : str
        Local interface the webhook receiver binds to.
    name : str
        Display name of the accessory.
    relatch_delay : float
        Seconds after a confirmed unlatch before the latch target is
        requested back to secured.
    """

    bridge_host: str
    token: str
    nuki_id: int
    callback_host: str
    bridge_port: int = DEFAULT_BRIDGE_PORT
    callback_port: int = DEFAULT_CALLBACK_PORT
    listen_host: str = DEFAULT_LISTEN_HOST
    name: str = DEFAULT_NAME
    relatch_delay: float = RELATCH_DELAY_SECONDS

    @property
    def base_url(self) -> str:
        """Root URL of the bridge HTTP API."""
        return f"http://{self.bridge_host}:{self.bridge_port}"

    @property
    def webhook_url(self) -> str:
        """Callback URL registered with the bridge."""
        return f"http://{self.callback_host}:{self.callback_port}/"

    @classmethod
    def from_env(cls, **overrides: Any) -> NukiLatchConfig:
        """Create configuration from ``NUKI_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        NukiConfigError
            A required value is missing or a numeric value does not parse.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _REQUIRED_ENV.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        optional_env = {
            "NUKI_BRIDGE_PORT": "bridge_port",
            "NUKI_CALLBACK_PORT": "callback_port",
            "NUKI_LISTEN_HOST": "listen_host",
            "NUKI_NAME": "name",
            "NUKI_RELATCH_DELAY": "relatch_delay",
        }
        for env_key, field_name in optional_env.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        config_kwargs.update(overrides)

        missing = sorted(name for name in _REQUIRED_ENV.values() if not config_kwargs.get(name))
        if missing:
            raise NukiConfigError(f"Missing required configuration: {', '.join(missing)}")

        try:
            for field_name in ("nuki_id", "bridge_port", "callback_port"):
                if field_name in config_kwargs:
                    config_kwargs[field_name] = int(config_kwargs[field_name])
            if "relatch_delay" in config_kwargs:
                config_kwargs["relatch_delay"] = float(config_kwargs["relatch_delay"])
        except (TypeError, ValueError) as exc:
            raise NukiConfigError(f"Invalid numeric configuration value: {exc}") from exc

        return cls(**config_kwargs)
