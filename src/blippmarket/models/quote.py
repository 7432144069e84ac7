"""BuyQuote, SellQuote - advisory pre-trade estimates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BuyQuote(BaseModel):
    """Result of spending base coin on the curve."""

    model_config = ConfigDict(frozen=True)

    base_amount_in: float
    shares_out: float
    price_per_share: float
    price_impact_pct: float
    fee_amount: float  # display only, not deducted
    new_base_reserve: float
    new_share_reserve: float


class SellQuote(BaseModel):
    """Result of returning shares to the curve."""

    model_config = ConfigDict(frozen=True)

    shares_in: float
    proceeds_out: float
    price_per_share: float
    price_impact_pct: float
    fee_amount: float  # display only, not deducted
    new_base_reserve: float
    new_share_reserve: float
