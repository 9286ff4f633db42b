"""Performance chart samples and the rolling buffer behind the chart."""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Iterator, List, Optional

from core.helpers.validation import as_mapping, finite_float

DEFAULT_CAPACITY = 30

# Dataset order matches the chart legend
SERIES_STYLE = (
    ("total_values", "Total Value", "#32b8c6"),
    ("portfolio_values", "Portfolio", "#00ff41"),
    ("cash_values", "Cash", "#ffaa00"),
)


@dataclass(frozen=True)
class ChartSample:
    """One point of the performance chart."""
    time: str
    total_value: float
    portfolio_value: float
    cash: float

    @classmethod
    def from_portfolio(cls, payload: Any, now: Optional[datetime] = None) -> Optional["ChartSample"]:
        """Derive a sample from a raw portfolio response (None if not an object)."""
        data = as_mapping(payload)
        if data is None:
            return None
        total = finite_float(data.get("value"))
        cash = finite_float(data.get("cash"))
        now = now or datetime.now()
        return cls(
            time=now.strftime("%H:%M:%S"),
            total_value=total,
            portfolio_value=total - cash,
            cash=cash,
        )


class PerformanceBuffer:
    """Fixed-capacity FIFO of chart samples.

    Appending past capacity drops exactly one sample from the head, so the
    buffer is a sliding window over the most recent refresh cycles.
    Projections are computed from the current contents on every access.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._samples: Deque[ChartSample] = deque()

    def push(self, sample: ChartSample):
        self._samples.append(sample)
        if len(self._samples) > self.capacity:
            self._samples.popleft()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[ChartSample]:
        return iter(list(self._samples))

    @property
    def samples(self) -> List[ChartSample]:
        return list(self._samples)

    @property
    def latest(self) -> Optional[ChartSample]:
        return self._samples[-1] if self._samples else None

    @property
    def labels(self) -> List[str]:
        return [s.time for s in self._samples]

    @property
    def total_values(self) -> List[float]:
        return [s.total_value for s in self._samples]

    @property
    def portfolio_values(self) -> List[float]:
        return [s.portfolio_value for s in self._samples]

    @property
    def cash_values(self) -> List[float]:
        return [s.cash for s in self._samples]

    def series(self) -> dict:
        """Chart data contract: shared labels plus one dataset per series."""
        return {
            "labels": self.labels,
            "datasets": [
                {"label": label, "color": color, "data": getattr(self, attr)}
                for attr, label, color in SERIES_STYLE
            ],
        }
