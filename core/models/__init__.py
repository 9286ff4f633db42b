"""Typed data models for the dashboard."""

from core.models.activity import SignalRow, TradeRecord, parse_signals, parse_trades
from core.models.chart import ChartSample, PerformanceBuffer
from core.models.market import MarketStatus, trading_window
from core.models.notification import Notification, Severity
from core.models.portfolio import Holding, PortfolioSnapshot, PositionRow

__all__ = [
    "ChartSample",
    "Holding",
    "MarketStatus",
    "Notification",
    "PerformanceBuffer",
    "PortfolioSnapshot",
    "PositionRow",
    "Severity",
    "SignalRow",
    "TradeRecord",
    "parse_signals",
    "parse_trades",
    "trading_window",
]
