"""Dashboard application entrypoints."""

from apps.dashboard.tui_live import LiveTradingDashboard, run_tui_async, run_tui

__all__ = [
    "LiveTradingDashboard",  # Live Textual TUI
    "run_tui_async",         # Run live TUI on the current loop
    "run_tui",               # Run live TUI standalone
]
