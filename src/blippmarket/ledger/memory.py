"""Dict-backed ledger for tests, simulation and offline CLI use."""

from __future__ import annotations

from blippmarket.errors import MarketNotFound
from blippmarket.models import MarketState, TradeHistoryPoint


class InMemoryLedger:
    """Implements LedgerReader and TradeHistoryFeed over plain dicts."""

    def __init__(self) -> None:
        self._markets: dict[str, MarketState] = {}
        self._history: dict[str, list[TradeHistoryPoint]] = {}

    def put_market(self, content_id: str, state: MarketState) -> None:
        self._markets[content_id] = state

    def record_trade(self, content_id: str, point: TradeHistoryPoint) -> None:
        if content_id not in self._markets:
            raise MarketNotFound(content_id)
        self._history.setdefault(content_id, []).append(point)

    def fetch_market_state(self, content_id: str) -> MarketState:
        try:
            return self._markets[content_id]
        except KeyError:
            raise MarketNotFound(content_id) from None

    def trade_history(self, content_id: str) -> list[TradeHistoryPoint]:
        if content_id not in self._markets:
            raise MarketNotFound(content_id)
        return list(self._history.get(content_id, []))
