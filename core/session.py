"""Bot session - the dashboard's view of whether the bot is trading.

One BotSession exists per process. It is owned by the DeskContainer and
handed to the controller, the market-hours monitor and the refresh
scheduler. Only BotController and MarketHoursMonitor change its state.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from core.logging_utils import get_logger
from core.models.market import MarketStatus

logger = get_logger(__name__)


class SessionState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass
class BotSession:
    """Active/Inactive state of the remote bot as last commanded."""
    state: SessionState = SessionState.INACTIVE
    changed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stop_reason: str = ""
    # Market status observed when the session last went ACTIVE
    activated_on: Optional[MarketStatus] = None
    transitions: int = 0
    _callbacks: list = field(default_factory=list, repr=False)

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def activate(self, market_status: MarketStatus):
        """Enter ACTIVE. Only valid on an open-market observation."""
        if not market_status.is_open:
            raise ValueError("Cannot activate session on a closed market")
        self.activated_on = market_status
        self.stop_reason = ""
        self._set(SessionState.ACTIVE)

    def deactivate(self, reason: str = "user"):
        """Enter INACTIVE unconditionally."""
        self.stop_reason = reason
        self._set(SessionState.INACTIVE)

    def register_callback(self, callback: Callable[["BotSession"], None]):
        """Register callback for state changes."""
        self._callbacks.append(callback)

    def _set(self, new_state: SessionState):
        old = self.state
        self.state = new_state
        self.changed_at = datetime.now(timezone.utc)
        self.transitions += 1
        logger.info("[SESSION] %s -> %s%s", old.value, new_state.value,
                    f" ({self.stop_reason})" if self.stop_reason else "")
        for cb in self._callbacks:
            try:
                cb(self)
            except Exception as e:
                logger.warning("[SESSION] Callback error: %s", e)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "changed_at": self.changed_at.isoformat(),
            "stop_reason": self.stop_reason,
            "transitions": self.transitions,
        }
