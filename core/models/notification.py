"""User-facing notification model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import itertools
import time

_ids = itertools.count(1)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Transient message; expires ``ttl_s`` seconds after creation."""
    title: str
    message: str
    severity: Severity = Severity.INFO
    ttl_s: float = 4.0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    created_mono: float = field(default_factory=time.monotonic)
    id: int = field(default_factory=lambda: next(_ids))

    @property
    def expires_mono(self) -> float:
        return self.created_mono + self.ttl_s

    def is_expired(self, now_mono: float = None) -> bool:
        if now_mono is None:
            now_mono = time.monotonic()
        return now_mono >= self.expires_mono

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "created_at": self.created_at.isoformat(),
        }
