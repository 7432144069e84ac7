"""Ledger collaborators: snapshot readers and trade history feeds."""

from blippmarket.ledger.aptos import AptosLedgerReader
from blippmarket.ledger.base import LedgerReader, TradeHistoryFeed
from blippmarket.ledger.memory import InMemoryLedger

__all__ = ["LedgerReader", "TradeHistoryFeed", "InMemoryLedger", "AptosLedgerReader"]
