#!/usr/bin/env python3
"""
TradeDesk - Trading Bot Dashboard

Usage:
    python run.py                          # Textual dashboard (keyboard controls)
    python run.py --plain                  # Read-only Rich view
    python run.py --api-base http://host:8000 --refresh-ms 5000
    python run.py --help                   # Show all options

Keys (Textual dashboard):
    s  start/stop bot     m  manual scan     x  square off all (confirm)
    r  refresh now        q  quit
"""

import argparse
import asyncio
from pathlib import Path


def _apply_overrides(args):
    from core.config import settings

    if args.api_base:
        settings.api_base = args.api_base
    if args.refresh_ms:
        settings.refresh_interval_ms = args.refresh_ms
    if args.log_level:
        settings.log_level = args.log_level
    return settings


async def _run_plain(container):
    from rich.live import Live
    from dashboard import Dashboard

    dashboard = Dashboard(container.state, container.notifier)
    container.start()
    with Live(dashboard.render(), console=dashboard.console, refresh_per_second=2, screen=True) as live:
        while True:
            await asyncio.sleep(0.5)
            live.update(dashboard.render())


async def _run(args):
    from core.desk_container import DeskContainer

    container = DeskContainer()
    try:
        if args.plain:
            await _run_plain(container)
        else:
            from apps.dashboard import run_tui_async
            await run_tui_async(container)
    finally:
        await container.close()


def main():
    parser = argparse.ArgumentParser(
        prog='tradedesk',
        description='TradeDesk - Trading Bot Dashboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                      Start dashboard against the local backend
  python run.py --plain              Read-only Rich view (no key controls)
"""
    )

    parser.add_argument('--api-base', type=str, default=None,
                        help='Backend base URL (default: API_BASE or http://127.0.0.1:8000)')
    parser.add_argument('--refresh-ms', type=int, default=None,
                        help='Refresh interval in milliseconds (default: 10000)')
    parser.add_argument('--plain', action='store_true',
                        help='Use the read-only Rich view instead of the Textual app')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (default: LOG_LEVEL or INFO)')

    args = parser.parse_args()
    settings = _apply_overrides(args)

    from core.logging_utils import add_file_handler, setup_logging, suppress_console_logging

    setup_logging(settings.log_level)
    Path(settings.logs_dir).mkdir(parents=True, exist_ok=True)
    add_file_handler(Path(settings.logs_dir) / "tradedesk.log")
    # The terminal belongs to the dashboard from here on
    suppress_console_logging(True)

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass
    finally:
        suppress_console_logging(False)


if __name__ == "__main__":
    main()
