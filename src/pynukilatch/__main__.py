"""Run the bridge until interrupted.

Configuration comes from ``NUKI_*`` environment variables; command-line
options override them::

    python -m pynukilatch --bridge-host 192.168.1.20 --token abc123 \\
        --nuki-id 123456789 --callback-host 192.168.1.10
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from typing import Any

from pynukilatch.bridge import NukiLatchBridge
from pynukilatch.config import NukiLatchConfig
from pynukilatch.exceptions import NukiError

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Expose a Nuki smart lock as lock/latch accessory surfaces.")
    parser.add_argument("--bridge-host", help="Nuki bridge host (NUKI_BRIDGE_HOST)")
    parser.add_argument("--bridge-port", type=int, help="Nuki bridge port (NUKI_BRIDGE_PORT)")
    parser.add_argument("--token", help="Nuki bridge API token (NUKI_BRIDGE_TOKEN)")
    parser.add_argument("--nuki-id", type=int, help="nukiId of the smart lock (NUKI_ID)")
    parser.add_argument("--callback-host", help="Address the bridge uses to reach us (NUKI_CALLBACK_HOST)")
    parser.add_argument("--callback-port", type=int, help="Webhook receiver port (NUKI_CALLBACK_PORT)")
    parser.add_argument("--listen-host", help="Interface to bind the webhook receiver to (NUKI_LISTEN_HOST)")
    parser.add_argument("--name", help="Accessory display name (NUKI_NAME)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    fields = ("bridge_host", "bridge_port", "token", "nuki_id", "callback_host", "callback_port", "listen_host", "name")
    return {name: getattr(args, name) for name in fields if getattr(args, name) is not None}


def _log_surface_change(characteristic: str, value: Any) -> None:
    logger.info("%s -> %s", characteristic, getattr(value, "name", value))


async def run(config: NukiLatchConfig) -> None:
    """Run the bridge until SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            pass

    bridge = NukiLatchBridge(config)
    for surface in (bridge.context.lock, bridge.context.latch, bridge.context.contact, bridge.context.battery):
        add_listener = getattr(surface, "add_listener", None)
        if add_listener is not None:
            add_listener(_log_surface_change)

    async with bridge:
        await stop_event.wait()
        logger.info("Shutting down...")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = NukiLatchConfig.from_env(**_overrides(args))
        asyncio.run(run(config))
    except NukiError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
