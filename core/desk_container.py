"""Simple dependency injection container for dashboard components."""

from datetime import datetime
from typing import Optional

import httpx

from core.bot_controller import BotController
from core.config import Settings, settings as default_settings
from core.helpers.timer import PeriodicTimer
from core.logging_utils import get_logger
from core.models import PerformanceBuffer
from core.notifications import NotificationChannel
from core.session import BotSession
from core.state import DashboardState
from datafeeds.backend_gateway import BackendGateway
from datafeeds.collectors import MarketHoursMonitor, RefreshScheduler

logger = get_logger(__name__)


class DeskContainer:
    """Builds and owns the process-wide dashboard components.

    The BotSession lives here and is shared by reference with the
    controller, the market-hours monitor and the display state.
    """

    def __init__(self, config: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.config = config or default_settings
        self.session = BotSession()
        self.notifier = NotificationChannel(ttl_s=self.config.notification_ttl_s)
        self.gateway = BackendGateway(self.notifier, base_url=self.config.api_base_url, client=client)
        self.state = DashboardState(
            session=self.session,
            chart=PerformanceBuffer(self.config.chart_capacity),
        )
        self.controller = BotController(self.session, self.gateway, self.notifier)
        self.monitor = MarketHoursMonitor(
            self.session, self.gateway, self.notifier,
            interval_s=self.config.market_check_interval_s,
        )
        self.scheduler = RefreshScheduler(
            self.gateway, self.state,
            interval_s=self.config.refresh_interval_s,
        )
        self.clock = PeriodicTimer("clock", self.config.clock_tick_s, self._tick, run_immediately=True)
        self._started = False

        self.session.register_callback(self._on_session_change)

    def _on_session_change(self, session: BotSession):
        reason = f" ({session.stop_reason})" if session.stop_reason else ""
        self.state.log(f"Bot {session.state.value}{reason}")

    def _tick(self):
        self.state.local_time = datetime.now()

    def start(self):
        """Start every background timer. Requires a running event loop."""
        if self._started:
            return
        self._started = True
        self.clock.start()
        self.scheduler.start()
        self.monitor.start()
        logger.info(
            "[DESK] Backend %s | refresh %.1fs | market check %.0fs",
            self.gateway.base_url, self.scheduler.interval_s, self.monitor.interval_s,
        )

    async def close(self):
        """Process teardown: stop timers and release the HTTP client."""
        await self.scheduler.stop()
        await self.monitor.stop()
        await self.clock.stop()
        await self.gateway.close()
        self._started = False
