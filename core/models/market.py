"""Market-hours snapshot as reported by the backend."""

from dataclasses import dataclass
from typing import Any, Optional

from core.helpers.validation import as_mapping, optional_str


@dataclass(frozen=True)
class MarketStatus:
    """Most recent market-status poll. Replaced wholesale, never merged."""
    is_open: bool
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None    # HH:MM

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["MarketStatus"]:
        """Parse a market-status response. Non-object payloads mean "unknown"."""
        data = as_mapping(payload)
        if data is None:
            return None
        return cls(
            is_open=bool(data.get("is_open")),
            start_time=optional_str(data.get("start_time")),
            end_time=optional_str(data.get("end_time")),
        )


def trading_window(
    status: Optional[MarketStatus],
    default_start: str = "09:15",
    default_end: str = "15:25",
) -> str:
    """Render "HH:MM - HH:MM", falling back to the defaults for missing fields."""
    start = (status.start_time if status else None) or default_start
    end = (status.end_time if status else None) or default_end
    return f"{start} - {end}"
