"""Conversion from on-chain integer units to human amounts."""

from __future__ import annotations

from blippmarket.models.market import UNIT_SCALE


def octas_to_coin(octas: int | str) -> float:
    """Octas to human coin amount (1 coin = 10^8 octas)."""
    return int(octas) / UNIT_SCALE


def shares_to_human(shares: int | str) -> float:
    return int(shares) / UNIT_SCALE
