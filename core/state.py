"""Shared display state for the dashboard.

Central container the refresh scheduler writes and the presentation
layer (Rich panels, Textual app) reads. Each resource is replaced as a
whole when its fetch succeeds and left untouched when it fails.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, Optional

from core.models import (
    MarketStatus,
    PerformanceBuffer,
    PortfolioSnapshot,
    PositionRow,
    SignalRow,
    TradeRecord,
)
from core.session import BotSession


@dataclass
class DashboardState:
    """Everything the screen shows.

    Sections:
        - Session: bot on/off (shared BotSession)
        - Market: open/closed indicator
        - Portfolio: summary, positions
        - Activity: trades, signals
        - Chart: rolling performance buffer
        - Refresh: cycle bookkeeping
    """

    session: BotSession = field(default_factory=BotSession)

    # Market
    market: Optional[MarketStatus] = None

    # Portfolio
    portfolio: Optional[PortfolioSnapshot] = None
    positions: list[PositionRow] = field(default_factory=list)

    # Activity
    trades: list[TradeRecord] = field(default_factory=list)
    signals: list[SignalRow] = field(default_factory=list)
    signal_count: Optional[int] = None  # Badge; kept while a scan returns nothing

    # Chart
    chart: PerformanceBuffer = field(default_factory=PerformanceBuffer)

    # Clock (ticked every second)
    local_time: datetime = field(default_factory=datetime.now)

    # Refresh bookkeeping
    last_updated: Optional[datetime] = None
    cycles: int = 0
    live_log: Deque[tuple[datetime, str, str]] = field(
        default_factory=lambda: deque(maxlen=100)
    )

    def log(self, msg: str, level: str = "INFO"):
        """Append to live log deque."""
        self.live_log.appendleft((datetime.now(timezone.utc), level, msg))

    @property
    def bot_active(self) -> bool:
        return self.session.is_active

    @property
    def market_open(self) -> Optional[bool]:
        return None if self.market is None else self.market.is_open

    @property
    def signals_loading(self) -> bool:
        """No signals in the latest scan: show the placeholder row."""
        return not self.signals
