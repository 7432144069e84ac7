"""Ledger collaborator protocols - market snapshot reads and trade history."""

from __future__ import annotations

from typing import Protocol

from blippmarket.models import MarketState, TradeHistoryPoint


class LedgerReader(Protocol):
    """Supplies fresh MarketState snapshots keyed by content id."""

    def fetch_market_state(self, content_id: str) -> MarketState:
        """Return the current snapshot. Raise MarketNotFound if no market exists."""
        ...


class TradeHistoryFeed(Protocol):
    """Supplies past (price, timestamp) points for charting, oldest first."""

    def trade_history(self, content_id: str) -> list[TradeHistoryPoint]: ...
