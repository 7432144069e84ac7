"""Market subcommand: stats, curve."""

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
from blippmarket.curve.metrics import market_stats
from blippmarket.errors import CurveError

app = typer.Typer(help="Market snapshot metrics and curve")


@app.command("stats")
def stats(
    ctx: typer.Context,
    video_id: str | None = VIDEO_ID_OPTION,
    base_reserve: float | None = BASE_RESERVE_OPTION,
    share_reserve: float | None = SHARE_RESERVE_OPTION,
) -> None:
    """Show spot price, market cap and graduation progress."""
    try:
        state = resolve_state(ctx, video_id, base_reserve, share_reserve)
        s = market_stats(state, get_engine(ctx))
    except CurveError as e:
        fail(e)
    typer.echo(f"Price: {s.current_price:.8f}")
    typer.echo(f"Market cap: {s.market_cap:,.4f}")
    typer.echo(f"Sold: {s.total_sold:,.2f}")
    graduated = "  (graduated)" if s.graduated else ""
    typer.echo(f"Graduation: {s.graduation_progress:.1f}%{graduated}")


@app.command("curve")
def curve(
    ctx: typer.Context,
    steps: int | None = typer.Option(None, "--steps", "-n", help="Sample count - 1 (default from config)"),
    video_id: str | None = VIDEO_ID_OPTION,
    base_reserve: float | None = BASE_RESERVE_OPTION,
    share_reserve: float | None = SHARE_RESERVE_OPTION,
) -> None:
    """Print the theoretical price curve up to the current sold supply."""
    try:
        state = resolve_state(ctx, video_id, base_reserve, share_reserve)
        for pt in get_engine(ctx).synthetic_curve(state, steps):
            typer.echo(f"  {pt.supply_sold:>16,.0f}  {pt.price:.12f}")
    except CurveError as e:
        fail(e)
