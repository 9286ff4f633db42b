"""
Dashboard Panels - Individual UI components.

Each function renders one panel of the dashboard from DashboardState.
Panels are plain Rich renderables, shared by the Rich Live display and
the Textual app.
"""

from typing import Iterable, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import settings
from core.models import Notification, Severity
from core.state import DashboardState

SPARK_CHARS = "▁▂▃▄▅▆▇█"

_SEVERITY_STYLE = {
    Severity.INFO: "cyan",
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


def money(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{settings.currency_symbol}{value:,.2f}"


def price_level(value) -> Text:
    """Stop-loss / take-profit levels arrive as raw backend values."""
    if value is None or value == "":
        return Text("-")
    return Text(f"{settings.currency_symbol}{value}")


def pnl_style(value: float) -> str:
    return "green" if value >= 0 else "red"


def render_top_bar(state: DashboardState) -> Text:
    """Render the status bar at top of dashboard."""
    bar = Text()

    # Bot
    bar.append("BOT: ", style="dim")
    if state.bot_active:
        bar.append("● Active", style="green bold")
    else:
        bar.append("● Inactive", style="red")
    bar.append(" │ ")

    # Market
    bar.append("MARKET: ", style="dim")
    if state.market_open is None:
        bar.append("?", style="dim")
    elif state.market_open:
        bar.append("Open", style="green")
    else:
        bar.append("Closed", style="red")
    bar.append(" │ ")

    # Total P&L
    total_pnl = state.portfolio.total_pnl if state.portfolio else 0.0
    bar.append("P&L: ", style="dim")
    bar.append(money(total_pnl), style=pnl_style(total_pnl))
    bar.append(" │ ")

    # Last refresh
    if state.last_updated:
        bar.append(f"Last updated: {state.last_updated.astimezone().strftime('%H:%M:%S')}", style="dim")
    else:
        bar.append("Waiting for first refresh...", style="dim")
    bar.append(" │ ")

    bar.append(state.local_time.strftime("%H:%M:%S"), style="bold")
    return bar


def render_summary_panel(state: DashboardState) -> Panel:
    """Financial summary: value, cash, P&L, win rate."""
    p = state.portfolio
    table = Table.grid(padding=(0, 2), expand=True)
    table.add_column(style="dim")
    table.add_column(justify="right")

    if p is None:
        table.add_row("Portfolio", "[dim]loading...[/]")
    else:
        table.add_row("Total Value", money(p.total_value))
        table.add_row("Cash", money(p.cash))
        table.add_row("Positions", str(p.position_count))
        table.add_row("Unrealized", Text(money(p.unrealized_pnl), style=pnl_style(p.unrealized_pnl)))
        table.add_row("Change", Text(f"{p.pnl_percent:.2f}%", style=pnl_style(p.pnl_percent)))
        table.add_row("Realized", Text(money(p.realized_pnl), style=pnl_style(p.realized_pnl)))
        table.add_row("Win Rate", f"{p.win_rate:.0f}% ({p.total_trades} trades)")

    return Panel(table, title="[bold cyan]💰 Summary[/]", border_style="cyan")


def render_positions_panel(state: DashboardState) -> Panel:
    """Open positions with approximate P&L."""
    if not state.positions:
        return Panel("[dim]No open positions[/]", title="[bold green]📊 Positions[/]", border_style="green")

    table = Table(box=None, padding=(0, 1), expand=True)
    table.add_column("Symbol", style="cyan")
    table.add_column("Qty", justify="right")
    table.add_column("Buy", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Invested", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("P&L %", justify="right")
    table.add_column("SL", justify="right")
    table.add_column("TP", justify="right")

    for row in state.positions:
        style = pnl_style(row.pnl)
        table.add_row(
            Text(row.symbol),
            f"{row.qty:g}",
            money(row.buy_price),
            money(row.current_price),
            money(row.invested),
            Text(money(row.pnl), style=style),
            Text(f"{row.pnl_pct:.2f}%", style=style),
            price_level(row.stop_loss),
            price_level(row.take_profit),
        )

    return Panel(table, title="[bold green]📊 Positions[/]", border_style="green")


def render_signals_panel(state: DashboardState) -> Panel:
    """Live signal scan."""
    badge = f" ({state.signal_count} stocks)" if state.signal_count is not None else ""
    title = f"[bold yellow]⚡ Live Signals{badge}[/]"

    if state.signals_loading:
        return Panel("[dim]Loading signals...[/]", title=title, border_style="yellow")

    table = Table(box=None, padding=(0, 1), expand=True)
    table.add_column("Symbol", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Signal")
    table.add_column("Score", justify="right")
    table.add_column("Mom", justify="right")
    table.add_column("Vol", justify="right")
    table.add_column("SL", justify="right")
    table.add_column("TP", justify="right")
    table.add_column("Reasons", style="dim", overflow="fold")

    for s in state.signals:
        signal = Text(f"🔥 {s.signal}", style="green bold") if s.is_buy else Text(f"⏸️ {s.signal}", style="dim")
        table.add_row(
            Text(s.symbol),
            money(s.price),
            signal,
            Text(f"{s.score}/100"),
            Text(f"{s.momentum:.2f}%", style="green" if s.momentum > 0 else "red"),
            f"{s.volume_ratio:.2f}x",
            money(s.stop_loss),
            money(s.take_profit),
            Text(s.reasons),
        )

    return Panel(table, title=title, border_style="yellow")


def render_trades_panel(state: DashboardState, limit: int = 15) -> Panel:
    """Trade history, most recent first as delivered by the backend."""
    if not state.trades:
        return Panel("[dim]No trades yet[/]", title="[bold white]📜 Trade History[/]", border_style="white")

    table = Table(box=None, padding=(0, 1), expand=True)
    table.add_column("Time", style="dim")
    table.add_column("Symbol", style="cyan")
    table.add_column("Action")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Score", justify="right")

    for t in state.trades[:limit]:
        action_style = "green" if t.action == "BUY" else "red" if t.action == "SELL" else "white"
        table.add_row(
            Text(t.display_time),
            Text(t.symbol),
            Text(t.action, style=action_style),
            f"{t.qty:g}" if t.qty else "-",
            money(t.price) if t.price else "-",
            Text(money(t.pnl), style=pnl_style(t.pnl)) if t.pnl else "-",
            Text(str(t.score)) if t.score else "-",
        )

    return Panel(table, title="[bold white]📜 Trade History[/]", border_style="white")


def sparkline(values: Iterable[float]) -> str:
    values = list(values)
    if not values:
        return ""
    lo, hi = min(values), max(values)
    span = hi - lo
    if span == 0:
        return SPARK_CHARS[len(SPARK_CHARS) // 2] * len(values)
    scale = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[round((v - lo) / span * scale)] for v in values)


def render_chart_panel(state: DashboardState) -> Panel:
    """Performance chart: one sparkline per series over the rolling window."""
    chart = state.chart
    if not len(chart):
        return Panel("[dim]Collecting samples...[/]", title="[bold magenta]📈 Performance[/]", border_style="magenta")

    series = chart.series()
    table = Table.grid(padding=(0, 1), expand=True)
    table.add_column(width=12)
    table.add_column(ratio=1)
    table.add_column(justify="right")
    for dataset in series["datasets"]:
        data = dataset["data"]
        table.add_row(
            Text(dataset["label"], style=dataset["color"]),
            Text(sparkline(data), style=dataset["color"]),
            money(data[-1]),
        )

    labels = series["labels"]
    footer = f"[dim]{labels[0]} → {labels[-1]} ({len(labels)}/{chart.capacity})[/]"
    table.add_row("", footer, "")
    return Panel(table, title="[bold magenta]📈 Performance[/]", border_style="magenta")


def render_notifications_panel(notifications: Iterable[Notification]) -> Panel:
    """Active toasts, oldest first."""
    lines = Text()
    for note in notifications:
        style = _SEVERITY_STYLE.get(note.severity, "white")
        if lines:
            lines.append("\n")
        lines.append(note.title, style=f"bold {style}")
        lines.append(f"  {note.message.replace(chr(10), ' ')}")
    if not lines:
        lines.append("No notifications", style="dim")
    return Panel(lines, title="[dim]Notifications[/]", border_style="dim")


def render_log_panel(state: DashboardState, limit: int = 5) -> Panel:
    """Recent session events."""
    lines = []
    for ts, lvl, msg in list(state.live_log)[:limit]:
        color = {"WARN": "yellow", "ERROR": "red"}.get(lvl, "dim")
        lines.append(f"[{color}]{ts.astimezone().strftime('%H:%M:%S')}[/] {msg[:80]}")
    if not lines:
        lines.append("[dim]No recent events[/]")
    return Panel("\n".join(lines), title="[dim]Recent[/]", border_style="dim")
