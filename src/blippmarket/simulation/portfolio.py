"""Simulated trader holdings and cash flow per run."""

from __future__ import annotations

from dataclasses import dataclass, field

from blippmarket.errors import CurveError
from blippmarket.models import MarketState, TradeHistoryPoint


@dataclass
class Portfolio:
    """Shares held and base coin flows. Fees are tracked, not deducted."""

    shares: float = 0.0
    base_spent: float = 0.0
    base_received: float = 0.0
    fees: float = 0.0
    fill_count: int = 0

    def apply_fill(self, side: str, base_amount: float, shares: float, fee: float) -> None:
        if side == "BUY":
            self.shares += shares
            self.base_spent += base_amount
        else:
            self.shares -= shares
            self.base_received += base_amount
        self.fees += fee
        self.fill_count += 1

    @property
    def net_base(self) -> float:
        return self.base_received - self.base_spent

    def mark_to_market(self, price: float) -> float:
        """Net base flow plus holdings valued at `price`."""
        return self.net_base + self.shares * price


@dataclass
class SimFill:
    """One accepted order."""

    index: int
    side: str
    amount: float
    shares: float
    base_amount: float
    price_per_share: float
    price_impact_pct: float
    fee: float


@dataclass
class SimRejection:
    """One rejected order and why."""

    index: int
    side: str
    amount: float
    code: str
    message: str

    @classmethod
    def from_error(cls, index: int, side: str, amount: float, err: CurveError) -> SimRejection:
        return cls(index=index, side=side, amount=amount, code=err.code, message=err.message)


@dataclass
class SimulationResult:
    """Outcome of replaying an order sequence against a hypothetical market."""

    run_id: str
    initial_state: MarketState
    final_state: MarketState
    portfolio: Portfolio
    fills: list[SimFill] = field(default_factory=list)
    rejections: list[SimRejection] = field(default_factory=list)
    price_path: list[TradeHistoryPoint] = field(default_factory=list)
