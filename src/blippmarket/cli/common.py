"""Shared CLI helpers: resolve a market snapshot from options or the ledger."""

from __future__ import annotations

from typing import NoReturn

import httpx
import typer
from pydantic import ValidationError

from blippmarket.curve.engine import BondingCurveEngine
from blippmarket.errors import CurveError
from blippmarket.ledger.aptos import AptosLedgerReader
from blippmarket.models import MarketState

VIDEO_ID_OPTION = typer.Option(None, "--video-id", "-v", help="Fetch reserves from the ledger for this video")
BASE_RESERVE_OPTION = typer.Option(None, "--base-reserve", "-b", help="Base coin reserve (incl. virtual offset)")
SHARE_RESERVE_OPTION = typer.Option(None, "--share-reserve", "-s", help="Unsold share reserve")


def resolve_state(
    ctx: typer.Context,
    video_id: str | None,
    base_reserve: float | None,
    share_reserve: float | None,
) -> MarketState:
    """Ledger snapshot for video_id, else explicit reserves, else a freshly initialized market."""
    settings = ctx.obj["settings"]
    if video_id:
        try:
            with AptosLedgerReader.from_settings(settings) as reader:
                return reader.fetch_market_state(video_id)
        except httpx.HTTPError as e:
            typer.echo(f"Ledger request failed: {e}")
            raise typer.Exit(1) from None
    try:
        return MarketState(
            base_reserve=settings.virtual_base_offset if base_reserve is None else base_reserve,
            share_reserve=settings.total_issuance if share_reserve is None else share_reserve,
            total_issuance=settings.total_issuance,
        )
    except ValidationError as e:
        typer.echo(f"Invalid market state: {e.errors()[0]['msg']}")
        raise typer.Exit(1) from None


def get_engine(ctx: typer.Context) -> BondingCurveEngine:
    return BondingCurveEngine.from_settings(ctx.obj["settings"])


def fail(err: CurveError) -> NoReturn:
    typer.echo(f"Error [{err.code}]: {err.message}")
    raise typer.Exit(1)
