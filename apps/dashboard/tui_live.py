"""
Live Textual TUI Dashboard.

Runs on the same event loop as the refresh scheduler and the market-hours
monitor, re-rendering from DashboardState twice a second. Key bindings
drive the bot controls; square-off asks for confirmation first.
"""

from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Grid, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Label, Static

from core.desk_container import DeskContainer
from core.logging_utils import get_logger
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

logger = get_logger(__name__)


class StatePanel(Static):
    """Static that renders one panel function from the shared state."""

    def __init__(self, state: DashboardState, render_fn, **kwargs):
        super().__init__(**kwargs)
        self.desk_state = state
        self.render_fn = render_fn

    def render(self):
        return self.render_fn(self.desk_state)


class NotificationsPanel(Static):
    """Active notifications (each disappears after its display time)."""

    def __init__(self, container: DeskContainer, **kwargs):
        super().__init__(**kwargs)
        self.container = container

    def render(self):
        return render_notifications_panel(self.container.notifier.active())


class ConfirmScreen(ModalScreen[bool]):
    """Yes/No dialog."""

    DEFAULT_CSS = """
    ConfirmScreen { align: center middle; }
    #dialog {
        width: 60; height: 9;
        border: thick $warning; background: $surface;
        padding: 1 2;
    }
    #buttons { height: 3; align: center middle; }
    #buttons Button { margin: 0 2; }
    """

    BINDINGS = [("y", "answer(True)", "Yes"), ("n,escape", "answer(False)", "No")]

    def __init__(self, question: str):
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Grid(id="dialog"):
            yield Label(self.question)
            with Horizontal(id="buttons"):
                yield Button("Yes", variant="error", id="yes")
                yield Button("No", variant="primary", id="no")

    def on_button_pressed(self, event: Button.Pressed):
        self.dismiss(event.button.id == "yes")

    def action_answer(self, answer: bool):
        self.dismiss(answer)


class LiveTradingDashboard(App):
    """Live trading dashboard - controls the bot and mirrors backend state."""

    CSS = """
    Screen {
        layout: grid;
        grid-size: 2 5;
        grid-columns: 1fr 2fr;
        grid-rows: 1 12 1fr 1fr 7;
        grid-gutter: 0 1;
    }

    #status { column-span: 2; height: 1; }
    #log { column-span: 2; }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("s", "toggle_bot", "Start/Stop"),
        ("m", "manual_scan", "Scan"),
        ("x", "square_off", "Square Off"),
        ("r", "refresh_now", "Refresh"),
    ]

    def __init__(self, container: DeskContainer, start_container: bool = True):
        super().__init__()
        self.container = container
        self.desk_state = container.state
        self.start_container = start_container
        self._control_busy = False

    def compose(self) -> ComposeResult:
        s = self.desk_state
        yield Header(show_clock=True)
        yield StatePanel(s, render_top_bar, id="status")
        yield StatePanel(s, render_summary_panel, id="summary")
        yield StatePanel(s, render_signals_panel, id="signals")
        yield StatePanel(s, render_chart_panel, id="chart")
        yield StatePanel(s, render_trades_panel, id="trades")
        yield StatePanel(s, render_positions_panel, id="positions")
        yield NotificationsPanel(self.container, id="notifications")
        yield StatePanel(s, render_log_panel, id="log")
        yield Footer()

    def on_mount(self):
        """Start background timers and the repaint timer."""
        if self.start_container:
            self.container.start()
        self.set_interval(0.5, self.refresh_all)

    def refresh_all(self):
        for widget in self.query(Static):
            widget.refresh()

    def _run_control(self, coro_fn, name: str):
        """Run one bot control in a worker; ignore presses while one is in flight."""
        if self._control_busy:
            self.notify("Previous command still running", severity="warning")
            return

        async def runner():
            try:
                await coro_fn()
            finally:
                self._control_busy = False
                self.refresh_all()

        self._control_busy = True
        self.run_worker(runner(), name=name, group="control")

    def action_toggle_bot(self):
        self._run_control(self.container.controller.toggle, "toggle")

    def action_manual_scan(self):
        self._run_control(self.container.controller.manual_scan, "scan")

    def action_square_off(self):
        def on_answer(confirmed: Optional[bool]):
            if confirmed:
                self._run_control(self.container.controller.square_off_all, "squareoff")
            else:
                logger.info("[TUI] Square off cancelled")

        self.push_screen(ConfirmScreen("Are you sure you want to square off all positions?"), on_answer)

    def action_refresh_now(self):
        self.run_worker(self.container.scheduler.run_cycle(), name="refresh", group="refresh")


async def run_tui_async(container: DeskContainer):
    """Run the TUI on the current loop (timers start on mount)."""
    app = LiveTradingDashboard(container)
    await app.run_async()


def run_tui(container: DeskContainer = None):
    """Run the TUI (standalone)."""
    container = container or DeskContainer()
    app = LiveTradingDashboard(container)
    app.run()


if __name__ == "__main__":
    run_tui()
