"""
Refresh Scheduler

Pulls every display resource from the backend on a fixed cadence:
- portfolio summary + positions
- trade history
- live signals
- market status (open/closed indicator)
- a fresh portfolio sample for the performance chart

Steps run sequentially within a cycle. A failed step keeps the previous
data for that resource and never stops the steps after it. The cycle's
"last updated" stamp is set only once every step has finished.
"""

from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

from core.config import settings
from core.helpers.timer import PeriodicTimer
from core.logger import log_refresh
from core.logging_utils import get_logger
from core.models import ChartSample, MarketStatus, PortfolioSnapshot, parse_signals, parse_trades
from core.state import DashboardState
from datafeeds.backend_gateway import BackendGateway, Endpoint

logger = get_logger(__name__)


class RefreshScheduler:
    """
    Periodic multi-resource refresh.

    Usage:
        scheduler = RefreshScheduler(gateway, state)
        scheduler.start()            # immediate cycle, then every interval
        await scheduler.run_cycle()  # one cycle on demand
    """

    def __init__(
        self,
        gateway: BackendGateway,
        state: DashboardState,
        interval_s: Optional[float] = None,
    ):
        self.gateway = gateway
        self.state = state
        self.interval_s = interval_s or settings.refresh_interval_s
        self._timer = PeriodicTimer("refresh", self.interval_s, self.run_cycle, run_immediately=True)

        # Callbacks
        self._cycle_callbacks: list[Callable[[dict], None]] = []

        # Stats
        self.cycles = 0
        self.step_failures = 0

        self._steps: List[tuple[str, Callable[[], Awaitable[bool]]]] = [
            ("portfolio", self.refresh_portfolio),
            ("trades", self.refresh_trades),
            ("signals", self.refresh_signals),
            ("market", self.refresh_market_status),
            ("chart", self.refresh_chart),
        ]

    def start(self):
        """Start the refresh loop (first cycle runs immediately)."""
        self._timer.start()

    async def stop(self):
        await self._timer.stop()

    def on_cycle(self, callback: Callable[[dict], None]):
        """Register callback invoked with each cycle summary."""
        self._cycle_callbacks.append(callback)

    async def run_cycle(self) -> dict:
        """Run every step in order, then publish the completion stamp."""
        results: dict[str, bool] = {}
        for name, step in self._steps:
            try:
                results[name] = await step()
            except Exception as e:
                # Malformed data in one resource must not sink the cycle
                logger.warning("[REFRESH] Step %s failed: %s", name, e, exc_info=True)
                results[name] = False
            if not results[name]:
                self.step_failures += 1

        now = datetime.now(timezone.utc)
        self.cycles += 1
        self.state.cycles = self.cycles
        self.state.last_updated = now

        failed = [name for name, ok in results.items() if not ok]
        summary = {"cycle": self.cycles, "steps": results, "failed": failed}
        if failed:
            logger.info("[REFRESH] Cycle %s done; failed: %s", self.cycles, ", ".join(failed))
            self.state.log(f"Refresh: {', '.join(failed)} unavailable", "WARN")
        else:
            logger.debug("[REFRESH] Cycle %s done", self.cycles)
        try:
            log_refresh(summary)
        except OSError as e:
            logger.warning("[REFRESH] Failed to record cycle: %s", e)

        for cb in self._cycle_callbacks:
            try:
                cb(summary)
            except Exception as e:
                logger.warning("[REFRESH] Callback error: %s", e)
        return summary

    # === Steps (each returns True when the resource was updated) ===

    async def refresh_portfolio(self) -> bool:
        result = await self.gateway.get(Endpoint.PORTFOLIO)
        if not result.ok:
            return False
        snapshot = PortfolioSnapshot.from_payload(result.data)
        if snapshot is None:
            logger.warning("[REFRESH] Portfolio payload is not an object")
            return False
        self.state.portfolio = snapshot
        self.state.positions = snapshot.position_rows()
        return True

    async def refresh_trades(self) -> bool:
        result = await self.gateway.get(Endpoint.TRADES)
        if not result.ok:
            return False
        trades = parse_trades(result.data)
        if trades is None:
            logger.warning("[REFRESH] Trades payload is not a list")
            return False
        self.state.trades = trades
        return True

    async def refresh_signals(self) -> bool:
        result = await self.gateway.get(Endpoint.SIGNALS)
        if not result.ok:
            return False
        signals = parse_signals(result.data)
        if signals is None:
            logger.warning("[REFRESH] Signals payload is not a list")
            return False
        self.state.signals = signals
        if signals:
            self.state.signal_count = len(signals)
        return True

    async def refresh_market_status(self) -> bool:
        result = await self.gateway.get(Endpoint.MARKET_STATUS)
        if not result.ok:
            return False
        status = MarketStatus.from_payload(result.data)
        if status is None:
            return False
        self.state.market = status
        return True

    async def refresh_chart(self) -> bool:
        result = await self.gateway.get(Endpoint.PORTFOLIO)
        if not result.ok:
            return False
        sample = ChartSample.from_portfolio(result.data)
        if sample is None:
            return False
        self.state.chart.push(sample)
        return True

    def get_stats(self) -> dict:
        return {
            "cycles": self.cycles,
            "step_failures": self.step_failures,
            "timer_errors": self._timer.errors,
            "chart_points": len(self.state.chart),
        }
