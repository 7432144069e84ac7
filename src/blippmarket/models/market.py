"""MarketState, MarketInfo - market snapshot as priced and as stored on-chain."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Contract stores both coin amounts (octas) and shares with 8 decimals
SHARE_DECIMALS = 8
UNIT_SCALE = 10**SHARE_DECIMALS


class MarketState(BaseModel):
    """Immutable reserve snapshot of one content item's market (human units)."""

    model_config = ConfigDict(frozen=True)

    base_reserve: float = Field(..., ge=0, description="Settlement coin held, incl. virtual offset")
    share_reserve: float = Field(..., ge=0, description="Unsold shares left in the pool")
    total_issuance: float = Field(..., gt=0, description="Fixed total share supply")
    graduated: bool = False
    creator: str | None = None

    @model_validator(mode="after")
    def _check_supply(self) -> MarketState:
        if self.share_reserve > self.total_issuance:
            raise ValueError(
                f"share_reserve {self.share_reserve} exceeds total_issuance {self.total_issuance}"
            )
        return self

    @property
    def k(self) -> float:
        return self.base_reserve * self.share_reserve

    @property
    def total_sold(self) -> float:
        return self.total_issuance - self.share_reserve


class MarketInfo(BaseModel):
    """Raw `get_market_info` view result. Integer fields may arrive as JSON strings."""

    creator: str = ""
    aptos_reserve: int = Field(..., ge=0)  # octas
    token_reserve: int = Field(..., ge=0)  # share units (8 decimals)
    total_sold: int = Field(0, ge=0)  # share units (8 decimals)
    graduated: bool = False

    @classmethod
    def from_view(cls, result: list) -> MarketInfo:
        """Build from the positional view tuple (creator, aptos, tokens, sold, graduated)."""
        creator, aptos_reserve, token_reserve, total_sold, graduated = result[:5]
        return cls(
            creator=creator,
            aptos_reserve=aptos_reserve,
            token_reserve=token_reserve,
            total_sold=total_sold,
            graduated=graduated,
        )

    def to_state(self, total_issuance: float) -> MarketState:
        from blippmarket.curve.units import octas_to_coin, shares_to_human

        return MarketState(
            base_reserve=octas_to_coin(self.aptos_reserve),
            share_reserve=shares_to_human(self.token_reserve),
            total_issuance=total_issuance,
            graduated=self.graduated,
            creator=self.creator or None,
        )
