"""Price series for charting: real trade history, else the theoretical curve."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from blippmarket.curve.engine import CHART_MIN_RANGE, BondingCurveEngine
from blippmarket.errors import DegenerateMarket, InvalidAmount
from blippmarket.models.market import MarketState
from blippmarket.models.trade import ChartPoint, CurvePoint, TradeHistoryPoint

if TYPE_CHECKING:
    from collections.abc import Sequence


class SyntheticCurve:
    """Lazy, restartable sampling of price = k / pool^2 from 0 to the sold supply.

    Yields steps + 1 points. Each iteration recomputes from the captured
    inputs, so iterating twice gives identical sequences.
    """

    __slots__ = ("k", "total_issuance", "steps", "max_sold")

    def __init__(
        self,
        state: MarketState,
        total_issuance: float,
        steps: int,
        min_range: float = CHART_MIN_RANGE,
    ) -> None:
        if steps < 1:
            raise InvalidAmount(f"steps must be at least 1, got {steps}")
        self.k = state.k
        self.total_issuance = total_issuance
        self.steps = steps
        # Fresh markets still get a visible curve
        self.max_sold = max(total_issuance - state.share_reserve, min_range)

    def __len__(self) -> int:
        return self.steps + 1

    def __iter__(self) -> Iterator[CurvePoint]:
        for i in range(self.steps + 1):
            sold = self.max_sold * (i / self.steps)
            pool = self.total_issuance - sold
            if pool <= 0:
                raise DegenerateMarket(f"curve sample at sold={sold} empties the pool")
            yield CurvePoint(supply_sold=sold, price=self.k / (pool * pool))


def synthetic_curve(
    state: MarketState,
    total_issuance: float,
    steps: int,
    min_range: float = CHART_MIN_RANGE,
) -> SyntheticCurve:
    return SyntheticCurve(state, total_issuance, steps, min_range=min_range)


def chart_series(
    history: Sequence[TradeHistoryPoint],
    state: MarketState | None,
    engine: BondingCurveEngine,
) -> list[ChartPoint]:
    """Real history if any, else the synthetic curve for state (empty without a market)."""
    if history:
        return [
            ChartPoint(value=p.price, label=p.timestamp.strftime("%Y-%m-%d %H:%M"))
            for p in history
        ]
    if state is None:
        return []
    return [
        ChartPoint(value=pt.price, label=f"Supply: {pt.supply_sold:.0f}")
        for pt in engine.synthetic_curve(state)
    ]
