"""TradeHistoryPoint, CurvePoint, ChartPoint - price series for charting."""

from datetime import datetime

from pydantic import BaseModel, Field


class TradeHistoryPoint(BaseModel):
    """Executed trade price. Unix-seconds integers are accepted for timestamp."""

    price: float = Field(..., ge=0)
    timestamp: datetime


class CurvePoint(BaseModel):
    """Sample of the theoretical curve: price at a given sold supply."""

    supply_sold: float
    price: float


class ChartPoint(BaseModel):
    value: float
    label: str
