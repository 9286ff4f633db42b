"""Portfolio snapshot models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.helpers.validation import as_mapping, finite_float, finite_int


@dataclass(frozen=True)
class Holding:
    """Open position as reported by the backend."""
    symbol: str
    qty: float = 0.0
    buy_price: float = 0.0
    stop_loss: Any = None
    take_profit: Any = None

    @classmethod
    def from_dict(cls, symbol: str, data: Any) -> "Holding":
        data = as_mapping(data) or {}
        return cls(
            symbol=symbol,
            qty=finite_float(data.get("qty")),
            buy_price=finite_float(data.get("buy_price")),
            stop_loss=data.get("stop_loss"),
            take_profit=data.get("take_profit"),
        )


@dataclass(frozen=True)
class PositionRow:
    """Position formatted for the positions table."""
    symbol: str
    qty: float
    buy_price: float
    current_price: float
    invested: float
    current_value: float
    pnl: float
    pnl_pct: float
    stop_loss: Any
    take_profit: Any

    @classmethod
    def from_holding(cls, holding: Holding) -> "PositionRow":
        # No live price feed: current price is the buy price, so P&L reads 0
        current = holding.buy_price
        invested = holding.buy_price * holding.qty
        pnl = (current - holding.buy_price) * holding.qty
        pnl_pct = (pnl / invested) * 100 if invested else 0.0
        return cls(
            symbol=holding.symbol,
            qty=holding.qty,
            buy_price=holding.buy_price,
            current_price=current,
            invested=invested,
            current_value=current * holding.qty,
            pnl=pnl,
            pnl_pct=pnl_pct,
            stop_loss=holding.stop_loss,
            take_profit=holding.take_profit,
        )


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Backend portfolio view. Missing or non-numeric fields read as 0."""
    total_value: float = 0.0
    cash: float = 0.0
    unrealized_pnl: float = 0.0
    realized_pnl: float = 0.0
    total_pnl: float = 0.0
    pnl_percent: float = 0.0
    win_rate: float = 0.0
    total_trades: int = 0
    positions: Dict[str, Holding] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["PortfolioSnapshot"]:
        data = as_mapping(payload)
        if data is None:
            return None
        raw_positions = as_mapping(data.get("positions")) or {}
        return cls(
            total_value=finite_float(data.get("value")),
            cash=finite_float(data.get("cash")),
            unrealized_pnl=finite_float(data.get("unrealized_pnl")),
            realized_pnl=finite_float(data.get("realized_pnl")),
            total_pnl=finite_float(data.get("total_pnl")),
            pnl_percent=finite_float(data.get("pnl_percent")),
            win_rate=finite_float(data.get("win_rate")),
            total_trades=finite_int(data.get("total_trades")),
            positions={
                str(symbol): Holding.from_dict(str(symbol), pos)
                for symbol, pos in raw_positions.items()
            },
        )

    @property
    def portfolio_value(self) -> float:
        """Value of invested positions (excludes cash)."""
        return self.total_value - self.cash

    @property
    def position_count(self) -> int:
        return len(self.positions)

    def position_rows(self) -> List[PositionRow]:
        return [PositionRow.from_holding(h) for h in self.positions.values()]
