#!/usr/bin/env python3
"""
Headless TradeDesk runner.

Runs the refresh scheduler and the market-hours monitor without any UI.
Notifications and refresh summaries go to the log instead of the screen.
Optionally requests a bot start once the first refresh has completed.
"""

import argparse
import asyncio
import signal
from pathlib import Path
from typing import Optional

from core.config import settings
from core.desk_container import DeskContainer
from core.logging_utils import add_file_handler, get_logger, setup_logging

logger = get_logger(__name__)


async def run_headless(start_bot: bool = False, container: Optional[DeskContainer] = None):
    """Run until SIGINT/SIGTERM."""
    container = container or DeskContainer()
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    handled = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
            handled.append(sig)
        except NotImplementedError:
            # Windows: fall back to KeyboardInterrupt
            pass

    first_refresh = asyncio.Event()
    container.scheduler.on_cycle(lambda _summary: first_refresh.set())

    container.scheduler.on_cycle(
        lambda summary: logger.info(
            "[HEADLESS] cycle=%s bot=%s market=%s chart=%s failed=%s",
            summary["cycle"],
            container.session.state.value,
            container.state.market_open,
            len(container.state.chart),
            ",".join(summary["failed"]) or "-",
        )
    )

    container.start()
    logger.info("[HEADLESS] Started against %s", container.gateway.base_url)
    try:
        if start_bot:
            # The timer runs the first cycle itself
            await first_refresh.wait()
            result = await container.controller.request_start()
            logger.info("[HEADLESS] Start requested: %s", result)
        await stop_event.wait()
    finally:
        logger.info("[HEADLESS] Shutting down")
        for sig in handled:
            loop.remove_signal_handler(sig)
        await container.close()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(prog="tradedesk-headless", description="Headless TradeDesk runner")
    parser.add_argument("--api-base", type=str, default=None, help="Backend base URL")
    parser.add_argument("--start-bot", action="store_true", help="Request a bot start after the first refresh")
    args = parser.parse_args()

    if args.api_base:
        settings.api_base = args.api_base

    setup_logging(settings.log_level)
    Path(settings.logs_dir).mkdir(parents=True, exist_ok=True)
    add_file_handler(Path(settings.logs_dir) / "headless.log")

    try:
        asyncio.run(run_headless(start_bot=args.start_bot))
    except KeyboardInterrupt:
        logger.info("[HEADLESS] Keyboard interrupt received")


if __name__ == "__main__":
    main()
