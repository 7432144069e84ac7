"""Pricing error taxonomy.

Every failure is a value-level error raised synchronously to the caller;
nothing here retries or recovers. Codes are stable strings so UIs and the
simulator can record them without parsing messages.
"""

from __future__ import annotations


class CurveError(Exception):
    """Base pricing error."""

    code: str = "curve_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidAmount(CurveError):
    """Non-positive (or NaN) trade amount or curve parameter."""

    code = "invalid_amount"


class InsufficientLiquidity(CurveError):
    """Trade would drain a reserve or cross the curve's bounds."""

    code = "insufficient_liquidity"


class InsufficientBalance(CurveError):
    """Sell exceeds circulating supply or the trader's holdings."""

    code = "insufficient_balance"

    def __init__(self, requested: float, available: float) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient balance: requested {requested}, available {available}")


class DegenerateMarket(CurveError):
    """Market snapshot cannot be priced (empty share reserve or zero spot price)."""

    code = "degenerate_market"


class DegenerateQuote(CurveError):
    """Trade too small to move the curve at float precision."""

    code = "degenerate_quote"


class MarketNotFound(CurveError):
    """No market exists for the content id. Raised by ledger readers."""

    code = "market_not_found"

    def __init__(self, content_id: str) -> None:
        self.content_id = content_id
        super().__init__(f"Market not found: {content_id}")
