"""
Bot Controller - start/stop the remote bot from the dashboard.

Start is gated on market hours: the controller asks the backend for the
market status first and refuses to start on a closed (or unknown) market.
Stop always succeeds locally, whatever the backend answers.

Neither operation is transactional. The backend command is issued and the
local session is flipped without waiting for a meaningful acknowledgment,
so a failed start/stop command leaves the dashboard believing it succeeded.
The next refresh does not reconcile this.
"""

from typing import Optional

from core.config import settings
from core.helpers.reasons import FailureKind
from core.logger import log_control
from core.logging_utils import get_logger
from core.models.market import MarketStatus, trading_window
from core.notifications import NotificationChannel
from core.session import BotSession, SessionState
from datafeeds.backend_gateway import BackendGateway, Endpoint

logger = get_logger(__name__)


class BotController:
    """
    User-facing bot controls.

    Usage:
        controller = BotController(session, gateway, notifier)
        await controller.toggle()          # start/stop button
        await controller.manual_scan()
        await controller.square_off_all()  # caller confirms first
    """

    def __init__(
        self,
        session: BotSession,
        gateway: BackendGateway,
        notifier: NotificationChannel,
    ):
        self.session = session
        self.gateway = gateway
        self.notifier = notifier

    # === Start / stop ===

    async def request_start(self) -> dict:
        """Start the bot if the market is open."""
        if self.session.is_active:
            logger.info("[CTRL] Start ignored: session already active")
            return {"success": True, "state": self.session.state.value, "message": "Already active"}

        result = await self.gateway.get(Endpoint.MARKET_STATUS)
        status: Optional[MarketStatus] = MarketStatus.from_payload(result.data) if result.ok else None

        if status is None or not status.is_open:
            window = trading_window(status, settings.default_market_open, settings.default_market_close)
            self.notifier.error(
                "🚫 Market Closed",
                f"The market is currently closed.\nTrading hours: {window}",
            )
            self._record("start", success=False, error=FailureKind.MARKET_CLOSED.value, window=window)
            logger.info("[CTRL] Start refused: market closed (%s)", window)
            return {
                "success": False,
                "state": self.session.state.value,
                "error": FailureKind.MARKET_CLOSED.value,
                "message": f"Trading hours: {window}",
            }

        ack = await self.gateway.post(Endpoint.START)
        if not ack.ok:
            logger.warning("[CTRL] Start command not acknowledged; marking active anyway")
        self.session.activate(status)
        self.notifier.success("✅ Bot Started", "Auto-trading is now active!")
        self._record("start", success=True, backend_ack=ack.ok)
        return {"success": True, "state": self.session.state.value, "message": "Bot started"}

    async def request_stop(self) -> dict:
        """Stop the bot. Local state goes INACTIVE even if the backend call fails."""
        ack = await self.gateway.post(Endpoint.STOP)
        if not ack.ok:
            logger.warning("[CTRL] Stop command not acknowledged; marking inactive anyway")
        self.session.deactivate("user")
        self.notifier.warning("⏹️ Bot Stopped", "Auto-trading has been stopped.")
        self._record("stop", success=True, backend_ack=ack.ok)
        return {"success": True, "state": self.session.state.value, "message": "Bot stopped"}

    async def toggle(self) -> dict:
        """Start when inactive, stop when active."""
        if self.session.state == SessionState.ACTIVE:
            return await self.request_stop()
        return await self.request_start()

    # === Other controls ===

    async def manual_scan(self) -> dict:
        """Ask the backend for an immediate signal scan."""
        ack = await self.gateway.get(Endpoint.SCAN)
        self.notifier.info("Manual Scan", "Triggered live signal scan.")
        self._record("scan", success=ack.ok)
        return {"success": ack.ok, "message": "Scan triggered"}

    async def square_off_all(self) -> dict:
        """Close every open position. The UI must confirm before calling."""
        ack = await self.gateway.post(Endpoint.SQUAREOFF)
        self.notifier.warning("Square Off", "All positions closed.")
        self._record("squareoff", success=ack.ok)
        return {"success": ack.ok, "message": "Square off requested"}

    # === Convenience properties ===

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def is_running(self) -> bool:
        return self.session.is_active

    def _record(self, action: str, **fields):
        try:
            log_control({"action": action, "session": self.session.state.value, **fields})
        except OSError as e:
            logger.warning("[CTRL] Failed to record %s: %s", action, e)
