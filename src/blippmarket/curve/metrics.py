"""Derived market metrics from a snapshot - price, cap, graduation."""

from __future__ import annotations

from pydantic import BaseModel

from blippmarket.curve.engine import BondingCurveEngine
from blippmarket.models.market import MarketState


class MarketStats(BaseModel):
    current_price: float
    market_cap: float
    total_sold: float
    graduation_progress: float  # raw, may exceed 100
    graduation_display_pct: float  # clamped to [0, 100]
    graduated: bool


def market_stats(state: MarketState, engine: BondingCurveEngine) -> MarketStats:
    """Summary of a snapshot as shown next to the trade form."""
    progress = engine.graduation_progress(state)
    return MarketStats(
        current_price=engine.current_price(state),
        market_cap=engine.market_cap(state),
        total_sold=state.total_sold,
        graduation_progress=progress,
        graduation_display_pct=min(max(progress, 0.0), 100.0),
        graduated=state.graduated,
    )
