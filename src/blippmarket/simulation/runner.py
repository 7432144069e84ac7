"""Offline what-if runner: quote and apply an order sequence against a hypothetical market."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Iterable

import structlog
from pydantic import BaseModel, Field

from blippmarket.curve.engine import BondingCurveEngine, apply_buy, apply_sell, invariant_drift
from blippmarket.errors import CurveError, InsufficientBalance
from blippmarket.models import MarketState, TradeHistoryPoint
from blippmarket.simulation.portfolio import Portfolio, SimFill, SimRejection, SimulationResult

log = structlog.get_logger(__name__)


class TradeOrder(BaseModel):
    """BUY spends `amount` base coin; SELL returns `amount` shares."""

    side: str = Field(..., pattern="^(BUY|SELL)$")
    amount: float


def parse_order(text: str) -> TradeOrder:
    """Parse `buy:1.5` / `sell:1000` (case-insensitive side)."""
    side, sep, amount = text.partition(":")
    if not sep:
        raise ValueError(f"order must look like side:amount, got {text!r}")
    return TradeOrder(side=side.strip().upper(), amount=float(amount))


def run_simulation(
    state: MarketState,
    orders: Iterable[TradeOrder],
    engine: BondingCurveEngine | None = None,
    initial_shares: float = 0.0,
    start: datetime | None = None,
    interval_sec: int = 60,
) -> SimulationResult:
    """Apply each order in turn to the latest hypothetical state.

    Rejected orders are recorded with their error code and the run continues.
    The runner stands in for the ledger, so it also records graduation once
    progress reaches 100%.
    """
    engine = engine or BondingCurveEngine()
    ts = start or datetime.now(UTC)
    portfolio = Portfolio(shares=initial_shares)
    result = SimulationResult(
        run_id=str(uuid.uuid4())[:8],
        initial_state=state,
        final_state=state,
        portfolio=portfolio,
    )

    for index, order in enumerate(orders):
        try:
            if order.side == "BUY":
                quote = engine.quote_buy(state, order.amount)
                new_state = apply_buy(state, quote)
                fill = SimFill(
                    index=index,
                    side=order.side,
                    amount=order.amount,
                    shares=quote.shares_out,
                    base_amount=quote.base_amount_in,
                    price_per_share=quote.price_per_share,
                    price_impact_pct=quote.price_impact_pct,
                    fee=quote.fee_amount,
                )
            else:
                if order.amount > portfolio.shares:
                    raise InsufficientBalance(order.amount, portfolio.shares)
                quote = engine.quote_sell(state, order.amount)
                new_state = apply_sell(state, quote)
                fill = SimFill(
                    index=index,
                    side=order.side,
                    amount=order.amount,
                    shares=quote.shares_in,
                    base_amount=quote.proceeds_out,
                    price_per_share=quote.price_per_share,
                    price_impact_pct=quote.price_impact_pct,
                    fee=quote.fee_amount,
                )
        except CurveError as e:
            log.info("sim_order_rejected", index=index, side=order.side, amount=order.amount, code=e.code)
            result.rejections.append(SimRejection.from_error(index, order.side, order.amount, e))
            continue

        drift = invariant_drift(state, new_state)
        if drift > 1e-9:
            log.warning("sim_invariant_drift", index=index, drift=drift)
        portfolio.apply_fill(fill.side, fill.base_amount, fill.shares, fill.fee)
        state = new_state
        if not state.graduated and engine.graduation_progress(state) >= 100.0:
            state = state.model_copy(update={"graduated": True})
            log.info("sim_market_graduated", index=index, base_reserve=state.base_reserve)
        result.fills.append(fill)
        ts = ts + timedelta(seconds=interval_sec)
        result.price_path.append(TradeHistoryPoint(price=engine.current_price(state), timestamp=ts))

    result.final_state = state
    return result
