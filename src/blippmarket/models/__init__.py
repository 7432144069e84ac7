"""Canonical schema (Pydantic) - MarketState, quotes, price series."""

from blippmarket.models.market import MarketInfo, MarketState
from blippmarket.models.quote import BuyQuote, SellQuote
from blippmarket.models.trade import ChartPoint, CurvePoint, TradeHistoryPoint

__all__ = [
    "MarketState",
    "MarketInfo",
    "BuyQuote",
    "SellQuote",
    "TradeHistoryPoint",
    "CurvePoint",
    "ChartPoint",
]
