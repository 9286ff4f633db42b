"""Trade history and live signal rows."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from core.helpers.validation import as_rows, finite_float


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch milliseconds (JavaScript Date convention)
        try:
            return datetime.fromtimestamp(value / 1000.0)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class TradeRecord:
    """One entry of the backend trade log."""
    timestamp: Optional[datetime]
    raw_timestamp: str
    symbol: str
    action: str
    qty: Optional[float] = None
    price: Optional[float] = None
    pnl: Optional[float] = None
    score: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "TradeRecord":
        raw_ts = data.get("timestamp")
        return cls(
            timestamp=_parse_timestamp(raw_ts),
            raw_timestamp="" if raw_ts is None else str(raw_ts),
            symbol=str(data.get("symbol", "")),
            action=str(data.get("action", "")).upper(),
            qty=finite_float(data["qty"]) if data.get("qty") else None,
            price=finite_float(data["price"]) if data.get("price") else None,
            pnl=finite_float(data["pnl"]) if data.get("pnl") else None,
            score=data.get("score") or None,
        )

    @property
    def is_profit(self) -> bool:
        return (self.pnl or 0.0) >= 0

    @property
    def display_time(self) -> str:
        if self.timestamp is None:
            return self.raw_timestamp or "-"
        return self.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class SignalRow:
    """One row of the live signal scan."""
    symbol: str
    price: float
    signal: str
    score: Any
    momentum: float
    volume_ratio: float
    stop_loss: float
    take_profit: float
    reasons: str

    @classmethod
    def from_dict(cls, data: dict) -> "SignalRow":
        reasons = data.get("reasons", "")
        if isinstance(reasons, (list, tuple)):
            reasons = ", ".join(str(r) for r in reasons)
        return cls(
            symbol=str(data.get("symbol", "")),
            price=finite_float(data.get("price")),
            signal=str(data.get("signal", "")),
            score=data.get("score", 0),
            momentum=finite_float(data.get("momentum")),
            volume_ratio=finite_float(data.get("volume_ratio")),
            stop_loss=finite_float(data.get("stop_loss")),
            take_profit=finite_float(data.get("take_profit")),
            reasons=str(reasons or ""),
        )

    @property
    def is_buy(self) -> bool:
        return self.signal == "BUY"


def parse_trades(payload: Any) -> Optional[List[TradeRecord]]:
    rows = as_rows(payload)
    if rows is None:
        return None
    return [TradeRecord.from_dict(row) for row in rows]


def parse_signals(payload: Any) -> Optional[List[SignalRow]]:
    rows = as_rows(payload)
    if rows is None:
        return None
    return [SignalRow.from_dict(row) for row in rows]
