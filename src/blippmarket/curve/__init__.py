"""Bonding curve pricing engine."""

from blippmarket.curve.engine import (
    BondingCurveEngine,
    apply_buy,
    apply_sell,
    current_price,
    graduation_progress,
    market_cap,
    quote_buy,
    quote_sell,
)
from blippmarket.curve.chart import SyntheticCurve, chart_series, synthetic_curve

__all__ = [
    "BondingCurveEngine",
    "quote_buy",
    "quote_sell",
    "current_price",
    "market_cap",
    "graduation_progress",
    "apply_buy",
    "apply_sell",
    "SyntheticCurve",
    "synthetic_curve",
    "chart_series",
]
