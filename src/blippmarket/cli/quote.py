"""Quote subcommand: buy, sell."""

from __future__ import annotations

import typer

from blippmarket.cli.common import (
    BASE_RESERVE_OPTION,
    SHARE_RESERVE_OPTION,
    VIDEO_ID_OPTION,
    fail,
    get_engine,
    resolve_state,
)
from blippmarket.errors import CurveError

app = typer.Typer(help="Pre-trade quotes (estimates, not guarantees)")


@app.command("buy")
def buy(
    ctx: typer.Context,
    amount: float = typer.Argument(..., help="Base coin to spend"),
    video_id: str | None = VIDEO_ID_OPTION,
    base_reserve: float | None = BASE_RESERVE_OPTION,
    share_reserve: float | None = SHARE_RESERVE_OPTION,
) -> None:
    """Quote shares received for spending AMOUNT."""
    try:
        state = resolve_state(ctx, video_id, base_reserve, share_reserve)
        quote = get_engine(ctx).quote_buy(state, amount)
    except CurveError as e:
        fail(e)
    typer.echo(f"Shares out: {quote.shares_out:,.2f}")
    typer.echo(f"Price per share: {quote.price_per_share:.8f}")
    typer.echo(f"Price impact: {quote.price_impact_pct:+.2f}%")
    typer.echo(f"Platform fee: {quote.fee_amount:.4f}")


@app.command("sell")
def sell(
    ctx: typer.Context,
    shares: float = typer.Argument(..., help="Shares to sell"),
    video_id: str | None = VIDEO_ID_OPTION,
    base_reserve: float | None = BASE_RESERVE_OPTION,
    share_reserve: float | None = SHARE_RESERVE_OPTION,
) -> None:
    """Quote base coin received for selling SHARES."""
    try:
        state = resolve_state(ctx, video_id, base_reserve, share_reserve)
        quote = get_engine(ctx).quote_sell(state, shares)
    except CurveError as e:
        fail(e)
    typer.echo(f"Proceeds: {quote.proceeds_out:.8f}")
    typer.echo(f"Price per share: {quote.price_per_share:.8f}")
    typer.echo(f"Price impact: {quote.price_impact_pct:+.2f}%")
    typer.echo(f"Platform fee: {quote.fee_amount:.8f}")
