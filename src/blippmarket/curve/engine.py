"""Constant-product bonding curve - buy/sell quotes, spot price, market cap, graduation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from blippmarket.errors import (
    DegenerateMarket,
    DegenerateQuote,
    InsufficientBalance,
    InsufficientLiquidity,
    InvalidAmount,
)
from blippmarket.models.market import MarketState
from blippmarket.models.quote import BuyQuote, SellQuote

if TYPE_CHECKING:
    from blippmarket.config.settings import Settings
    from blippmarket.curve.chart import SyntheticCurve

log = structlog.get_logger(__name__)

FEE_RATE = 0.01
VIRTUAL_BASE_OFFSET = 30.0
GRADUATION_THRESHOLD = 69.0
CURVE_SUPPLY = 1_000_000_000.0
CHART_POINTS = 50
CHART_MIN_RANGE = 1000.0


def _require_positive(value: float, name: str) -> None:
    # `not value > 0` also rejects NaN
    if not value > 0:
        raise InvalidAmount(f"{name} must be positive, got {value}")


def current_price(state: MarketState) -> float:
    """Spot price: base reserve per remaining share."""
    if state.share_reserve == 0:
        raise DegenerateMarket("share reserve is empty")
    return state.base_reserve / state.share_reserve


def _check_fee_rate(fee_rate: float) -> None:
    if not 0 <= fee_rate < 1:
        raise InvalidAmount(f"fee_rate must be in [0, 1), got {fee_rate}")


def quote_buy(state: MarketState, base_amount_in: float, fee_rate: float = FEE_RATE) -> BuyQuote:
    """Quote spending base_amount_in of the settlement coin. Fee is informational."""
    _require_positive(base_amount_in, "base_amount_in")
    _check_fee_rate(fee_rate)
    k = state.k
    new_base = state.base_reserve + base_amount_in
    new_shares = k / new_base
    shares_out = state.share_reserve - new_shares
    if shares_out >= state.share_reserve or new_shares <= 0:
        log.debug("quote_rejected", side="BUY", amount=base_amount_in, reason="liquidity")
        raise InsufficientLiquidity(
            f"buy of {base_amount_in} would exhaust the share reserve {state.share_reserve}"
        )
    if shares_out <= 0:
        raise DegenerateQuote(f"buy of {base_amount_in} yields no shares")
    # Reserves are non-zero once the curve moved, so the spot price is too
    spot = current_price(state)
    pps = base_amount_in / shares_out
    return BuyQuote(
        base_amount_in=base_amount_in,
        shares_out=shares_out,
        price_per_share=pps,
        price_impact_pct=(pps - spot) / spot * 100.0,
        fee_amount=base_amount_in * fee_rate,
        new_base_reserve=new_base,
        new_share_reserve=new_shares,
    )


def quote_sell(state: MarketState, shares_in: float, fee_rate: float = FEE_RATE) -> SellQuote:
    """Quote returning shares_in to the pool. Bounded by circulating supply only."""
    _require_positive(shares_in, "shares_in")
    _check_fee_rate(fee_rate)
    circulating = state.total_sold
    if shares_in > circulating:
        raise InsufficientBalance(shares_in, circulating)
    k = state.k
    new_shares = state.share_reserve + shares_in
    new_base = k / new_shares
    proceeds = state.base_reserve - new_base
    if proceeds >= state.base_reserve or proceeds < 0:
        log.debug("quote_rejected", side="SELL", amount=shares_in, reason="liquidity")
        raise InsufficientLiquidity(
            f"sell of {shares_in} would exhaust the base reserve {state.base_reserve}"
        )
    if proceeds == 0:
        raise DegenerateQuote(f"sell of {shares_in} yields no proceeds")
    spot = current_price(state)
    pps = proceeds / shares_in
    return SellQuote(
        shares_in=shares_in,
        proceeds_out=proceeds,
        price_per_share=pps,
        price_impact_pct=(pps - spot) / spot * 100.0,
        fee_amount=proceeds * fee_rate,
        new_base_reserve=new_base,
        new_share_reserve=new_shares,
    )


def market_cap(state: MarketState) -> float:
    """Spot price times sold supply."""
    return current_price(state) * state.total_sold


def graduation_progress(
    state: MarketState,
    virtual_base_offset: float = VIRTUAL_BASE_OFFSET,
    graduation_threshold: float = GRADUATION_THRESHOLD,
) -> float:
    """Real (non-virtual) base reserve as percent of the threshold. Not clamped."""
    _require_positive(graduation_threshold, "graduation_threshold")
    real_base = state.base_reserve - virtual_base_offset
    return real_base / graduation_threshold * 100.0


def apply_buy(state: MarketState, quote: BuyQuote) -> MarketState:
    """Hypothetical snapshot after the quoted buy settles."""
    return state.model_copy(
        update={"base_reserve": quote.new_base_reserve, "share_reserve": quote.new_share_reserve}
    )


def apply_sell(state: MarketState, quote: SellQuote) -> MarketState:
    """Hypothetical snapshot after the quoted sell settles."""
    # Float rounding can leave new_share_reserve a hair above total_issuance
    shares = min(quote.new_share_reserve, state.total_issuance)
    return state.model_copy(
        update={"base_reserve": quote.new_base_reserve, "share_reserve": shares}
    )


def invariant_drift(before: MarketState, after: MarketState) -> float:
    """Relative change in k between two snapshots (0 for a perfect trade)."""
    if before.k == 0:
        return 0.0 if after.k == 0 else math.inf
    return abs(after.k - before.k) / before.k


class BondingCurveEngine:
    """Pure quote functions bound to one deployment's curve parameters. Holds no market state."""

    __slots__ = ("fee_rate", "virtual_base_offset", "graduation_threshold", "chart_points", "chart_min_range")

    def __init__(
        self,
        fee_rate: float = FEE_RATE,
        virtual_base_offset: float = VIRTUAL_BASE_OFFSET,
        graduation_threshold: float = GRADUATION_THRESHOLD,
        chart_points: int = CHART_POINTS,
        chart_min_range: float = CHART_MIN_RANGE,
    ) -> None:
        _check_fee_rate(fee_rate)
        _require_positive(graduation_threshold, "graduation_threshold")
        self.fee_rate = fee_rate
        self.virtual_base_offset = virtual_base_offset
        self.graduation_threshold = graduation_threshold
        self.chart_points = chart_points
        self.chart_min_range = chart_min_range

    @classmethod
    def from_settings(cls, settings: Settings) -> BondingCurveEngine:
        return cls(
            fee_rate=settings.fee_rate,
            virtual_base_offset=settings.virtual_base_offset,
            graduation_threshold=settings.graduation_threshold,
            chart_points=settings.chart_points,
            chart_min_range=settings.chart_min_range,
        )

    def quote_buy(self, state: MarketState, base_amount_in: float) -> BuyQuote:
        return quote_buy(state, base_amount_in, fee_rate=self.fee_rate)

    def quote_sell(self, state: MarketState, shares_in: float) -> SellQuote:
        return quote_sell(state, shares_in, fee_rate=self.fee_rate)

    def current_price(self, state: MarketState) -> float:
        return current_price(state)

    def market_cap(self, state: MarketState) -> float:
        return market_cap(state)

    def graduation_progress(self, state: MarketState) -> float:
        return graduation_progress(state, self.virtual_base_offset, self.graduation_threshold)

    def synthetic_curve(self, state: MarketState, steps: int | None = None) -> SyntheticCurve:
        # chart imports this module at load time
        from blippmarket.curve.chart import SyntheticCurve

        return SyntheticCurve(
            state,
            state.total_issuance,
            steps if steps is not None else self.chart_points,
            min_range=self.chart_min_range,
        )
