"""Background collectors polling the trading backend."""

from datafeeds.collectors.market_monitor import MarketHoursMonitor
from datafeeds.collectors.refresh_scheduler import RefreshScheduler

__all__ = [
    "MarketHoursMonitor",
    "RefreshScheduler",
]
