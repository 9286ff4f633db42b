"""
Main Dashboard Display - Rich Live rendering of DashboardState.

Used by the plain-terminal mode of run.py (no Textual). Layout:
status bar, summary/positions, signals/trades, chart/notifications.
"""

from typing import Optional

from rich.console import Console
from rich.layout import Layout

from core.notifications import NotificationChannel
from core.state import DashboardState
from dashboard.panels import (
    render_chart_panel,
    render_log_panel,
    render_notifications_panel,
    render_positions_panel,
    render_signals_panel,
    render_summary_panel,
    render_top_bar,
    render_trades_panel,
)

console = Console()


class Dashboard:
    """Clean, modular terminal dashboard."""

    def __init__(self, state: Optional[DashboardState] = None, notifier: Optional[NotificationChannel] = None):
        self.console = console
        self.state = state or DashboardState()
        self.notifier = notifier

    def render(self) -> Layout:
        """Render the full dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=1),
            Layout(name="main"),
            Layout(name="footer", size=7),
        )

        layout["main"].split_row(
            Layout(name="left", ratio=1),
            Layout(name="right", ratio=2),
        )
        layout["left"].split_column(
            Layout(name="summary", size=10),
            Layout(name="chart", size=7),
            Layout(name="positions"),
        )
        layout["right"].split_column(
            Layout(name="signals", ratio=1),
            Layout(name="trades", ratio=1),
        )
        layout["footer"].split_row(
            Layout(name="notifications"),
            Layout(name="log"),
        )

        notes = self.notifier.active() if self.notifier else []
        layout["header"].update(render_top_bar(self.state))
        layout["summary"].update(render_summary_panel(self.state))
        layout["chart"].update(render_chart_panel(self.state))
        layout["positions"].update(render_positions_panel(self.state))
        layout["signals"].update(render_signals_panel(self.state))
        layout["trades"].update(render_trades_panel(self.state))
        layout["notifications"].update(render_notifications_panel(notes))
        layout["log"].update(render_log_panel(self.state))

        return layout
