"""Rendering tests for the dashboard panels."""

from datetime import datetime, timezone

import pytest
from rich.console import Console

from core.models import ChartSample, MarketStatus, Notification, Severity
from core.state import DashboardState
from dashboard.display import Dashboard
from dashboard.panels import (
    render_chart_panel,
    render_notifications_panel,
    render_positions_panel,
    render_signals_panel,
    render_summary_panel,
    render_top_bar,
    render_trades_panel,
    sparkline,
)
from desk_fakes import full_backend, make_desk


def text_of(renderable) -> str:
    console = Console(record=True, width=160, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_empty_state_placeholders():
    state = DashboardState()

    assert "Waiting for first refresh..." in text_of(render_top_bar(state))
    assert "● Inactive" in text_of(render_top_bar(state))
    assert "No open positions" in text_of(render_positions_panel(state))
    assert "Loading signals..." in text_of(render_signals_panel(state))
    assert "No trades yet" in text_of(render_trades_panel(state))
    assert "Collecting samples..." in text_of(render_chart_panel(state))
    assert "loading..." in text_of(render_summary_panel(state))


def test_top_bar_shows_market_and_clock():
    state = DashboardState(market=MarketStatus(is_open=False))
    state.local_time = datetime(2026, 10, 19, 14, 3, 7)
    state.last_updated = datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc)

    text = text_of(render_top_bar(state))

    assert "MARKET: Closed" in text
    assert "14:03:07" in text
    assert "Last updated:" in text


@pytest.mark.asyncio
async def test_panels_after_refresh():
    desk = make_desk(full_backend())
    await desk.scheduler.run_cycle()
    state = desk.state

    positions = text_of(render_positions_panel(state))
    assert "INFY" in positions and "TCS" in positions
    assert "₹1,500.00" in positions

    signals = text_of(render_signals_panel(state))
    assert "(2 stocks)" in signals
    assert "82/100" in signals
    assert "Weak trend" in signals

    trades = text_of(render_trades_panel(state))
    assert "HDFC" in trades and "SELL" in trades

    summary = text_of(render_summary_panel(state))
    assert "₹100,000.00" in summary
    assert "55% (20 trades)" in summary

    chart = text_of(render_chart_panel(state))
    assert "Total Value" in chart and "Cash" in chart
    assert "(1/30)" in chart

    assert "MARKET: Open" in text_of(render_top_bar(state))


def test_chart_panel_window_label():
    state = DashboardState()
    for i in range(3):
        state.chart.push(ChartSample(f"10:00:0{i}", 100.0 + i, 40.0, 60.0 + i))
    assert "10:00:00 → 10:00:02 (3/30)" in text_of(render_chart_panel(state))


def test_notifications_panel():
    notes = [
        Notification("🚫 Market Closed", "The market is currently closed.\nTrading hours: 09:15 - 15:25", Severity.ERROR),
        Notification("Manual Scan", "Triggered live signal scan.", Severity.INFO),
    ]
    text = text_of(render_notifications_panel(notes))
    assert "Trading hours: 09:15 - 15:25" in text
    assert "Manual Scan" in text
    assert "No notifications" in text_of(render_notifications_panel([]))


def test_sparkline():
    assert sparkline([]) == ""
    assert sparkline([5, 5, 5]) == "▅▅▅"
    line = sparkline([1, 2, 3])
    assert line[0] == "▁" and line[-1] == "█"


def test_dashboard_layout_renders():
    state = DashboardState()
    text = text_of(Dashboard(state=state).render())
    assert "Summary" in text
    assert "Live Signals" in text


@pytest.mark.asyncio
async def test_bracketed_backend_text_renders_literally():
    backend = full_backend({
        "/portfolio": {"value": 1000, "cash": 500,
                       "positions": {"[/x]": {"qty": 1, "buy_price": 500, "stop_loss": "[red]490"}}},
        "/signals": [{"symbol": "[bold]ACME", "signal": "BUY", "score": "[/s]",
                      "reasons": "RSI[/14] crossover"}],
        "/trades": [{"timestamp": "[/t]", "symbol": "[/y]", "action": "buy", "score": "[i]"}],
    })
    desk = make_desk(backend)
    await desk.scheduler.run_cycle()

    positions = text_of(render_positions_panel(desk.state))
    assert "[/x]" in positions
    assert "₹[red]490" in positions

    signals = text_of(render_signals_panel(desk.state))
    assert "RSI[/14] crossover" in signals
    assert "[bold]ACME" in signals
    assert "[/s]/100" in signals

    trades = text_of(render_trades_panel(desk.state))
    assert "[/t]" in trades and "[/y]" in trades and "[i]" in trades
