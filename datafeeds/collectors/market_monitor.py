"""
Market-hours safety monitor.

While the bot is active, polls the market status on its own cadence
(independent of the refresh scheduler) and force-stops the bot when the
market has closed. A failed poll is "status unknown" and never treated
as closed.
"""

from typing import Optional

from core.config import settings
from core.helpers.reasons import FailureKind
from core.helpers.timer import PeriodicTimer
from core.logger import log_control
from core.logging_utils import get_logger
from core.models.market import MarketStatus
from core.notifications import NotificationChannel
from core.session import BotSession
from datafeeds.backend_gateway import BackendGateway, Endpoint

logger = get_logger(__name__)

AUTO_STOP_REASON = FailureKind.MARKET_CLOSED.value


class MarketHoursMonitor:
    """Force-stops the bot when the market closes under it."""

    def __init__(
        self,
        session: BotSession,
        gateway: BackendGateway,
        notifier: NotificationChannel,
        interval_s: Optional[float] = None,
    ):
        self.session = session
        self.gateway = gateway
        self.notifier = notifier
        self.interval_s = interval_s or settings.market_check_interval_s
        self._timer = PeriodicTimer("market-monitor", self.interval_s, self.check_once)

        # Stats
        self.checks = 0
        self.unknown = 0
        self.auto_stops = 0
        self.last_status: Optional[MarketStatus] = None

    def start(self):
        self._timer.start()

    async def stop(self):
        await self._timer.stop()

    async def check_once(self) -> str:
        """One monitor cycle. Returns skipped / unknown / open / stopped."""
        if not self.session.is_active:
            return "skipped"

        self.checks += 1
        result = await self.gateway.get(Endpoint.MARKET_STATUS)
        status = MarketStatus.from_payload(result.data) if result.ok else None
        if status is None:
            self.unknown += 1
            logger.info("[MONITOR] Market status unknown (%s); no action",
                        result.detail or FailureKind.STALE_MARKET_STATUS.value)
            return "unknown"

        self.last_status = status
        if status.is_open:
            return "open"

        if not self.session.is_active:
            # Stopped by the user while the poll was in flight
            logger.info("[MONITOR] Market closed but session already inactive")
            return "skipped"

        ack = await self.gateway.post(Endpoint.STOP)
        self.session.deactivate(AUTO_STOP_REASON)
        self.auto_stops += 1
        self.notifier.warning("🚫 Market Closed", "Market has closed. Bot stopped automatically.")
        logger.warning("[MONITOR] Market closed; bot stopped automatically")
        try:
            log_control({"action": "auto_stop", "reason": AUTO_STOP_REASON, "backend_ack": ack.ok})
        except OSError as e:
            logger.warning("[MONITOR] Failed to record auto stop: %s", e)
        return "stopped"

    def get_stats(self) -> dict:
        return {
            "checks": self.checks,
            "unknown": self.unknown,
            "auto_stops": self.auto_stops,
            "timer_errors": self._timer.errors,
        }
