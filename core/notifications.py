"""
Notification channel for transient, user-facing messages.

Any component may post; each notification lives for a fixed display
duration and then disappears on its own timer. Posts never block and
are never deduplicated.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from core.config import settings
from core.logger import log_notification
from core.logging_utils import get_logger
from core.models.notification import Notification, Severity

logger = get_logger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class NotificationChannel:
    """Queue of auto-expiring notifications."""

    def __init__(self, ttl_s: Optional[float] = None, history: int = 200):
        self.ttl_s = settings.notification_ttl_s if ttl_s is None else ttl_s
        self._active: List[Notification] = []
        self._handles: dict[int, asyncio.TimerHandle] = {}
        self._callbacks: list[Callable[[Notification], None]] = []
        # Everything posted this session, for logs/debug panels
        self.history: Deque[Notification] = deque(maxlen=history)

    def post(self, title: str, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        """Enqueue a notification and schedule its removal. Fire-and-forget."""
        note = Notification(
            title=title,
            message=message,
            severity=Severity(severity),
            ttl_s=self.ttl_s,
        )
        self._active.append(note)
        self.history.append(note)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._handles[note.id] = loop.call_later(self.ttl_s, self._expire, note)

        logger.log(_LOG_LEVELS[note.severity], "[NOTIFY] %s: %s", title, message.replace("\n", " "))
        try:
            log_notification(note.to_dict())
        except OSError as e:
            logger.warning("[NOTIFY] Failed to record notification: %s", e)
        self._notify_callbacks(note)
        return note

    def info(self, title: str, message: str) -> Notification:
        return self.post(title, message, Severity.INFO)

    def success(self, title: str, message: str) -> Notification:
        return self.post(title, message, Severity.SUCCESS)

    def warning(self, title: str, message: str) -> Notification:
        return self.post(title, message, Severity.WARNING)

    def error(self, title: str, message: str) -> Notification:
        return self.post(title, message, Severity.ERROR)

    def active(self) -> List[Notification]:
        """Notifications currently on display, oldest first."""
        self._prune()
        return list(self._active)

    def on_post(self, callback: Callable[[Notification], None]):
        """Register callback invoked for every posted notification."""
        self._callbacks.append(callback)

    def clear(self):
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._active.clear()

    def _expire(self, note: Notification):
        self._handles.pop(note.id, None)
        try:
            self._active.remove(note)
        except ValueError:
            pass

    def _prune(self):
        # Covers posts made without a running loop (no timer was scheduled)
        expired = [n for n in self._active if n.is_expired()]
        for note in expired:
            handle = self._handles.pop(note.id, None)
            if handle is not None:
                handle.cancel()
            self._active.remove(note)

    def _notify_callbacks(self, note: Notification):
        for cb in self._callbacks:
            try:
                cb(note)
            except Exception as e:
                logger.warning("[NOTIFY] Callback error: %s", e)

    def __len__(self) -> int:
        return len(self.active())
