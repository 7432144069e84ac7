"""Sim subcommand: run."""

from __future__ import annotations

import typer
from pydantic import ValidationError

from blippmarket.cli.common import BASE_RESERVE_OPTION, SHARE_RESERVE_OPTION, get_engine, resolve_state
from blippmarket.simulation.runner import parse_order, run_simulation

app = typer.Typer(help="Offline trade simulation against a hypothetical market")


@app.command("run")
def run_sim(
    ctx: typer.Context,
    order: list[str] = typer.Option(..., "--order", "-o", help="side:amount, e.g. buy:1 or sell:1000 (repeatable)"),
    initial_shares: float = typer.Option(0.0, "--initial-shares", help="Shares the trader holds at start"),
    base_reserve: float | None = BASE_RESERVE_OPTION,
    share_reserve: float | None = SHARE_RESERVE_OPTION,
) -> None:
    """Replay ORDERs in sequence and report fills, rejections and final state."""
    try:
        orders = [parse_order(o) for o in order]
    except (ValueError, ValidationError) as e:
        typer.echo(f"Bad order: {e}")
        raise typer.Exit(1) from None
    state = resolve_state(ctx, None, base_reserve, share_reserve)
    engine = get_engine(ctx)
    result = run_simulation(state, orders, engine=engine, initial_shares=initial_shares)
    typer.echo(f"Run id: {result.run_id}")
    for f in result.fills:
        typer.echo(
            f"  #{f.index} {f.side:<4} {f.amount:>14,.4f} -> shares {f.shares:,.2f}  "
            f"base {f.base_amount:.8f}  impact {f.price_impact_pct:+.2f}%"
        )
    for r in result.rejections:
        typer.echo(f"  #{r.index} {r.side:<4} {r.amount:>14,.4f} rejected [{r.code}] {r.message}")
    final = result.final_state
    typer.echo(f"Fills: {len(result.fills)}  Rejected: {len(result.rejections)}")
    typer.echo(f"Final reserves: base {final.base_reserve:.8f}  shares {final.share_reserve:,.2f}")
    typer.echo(f"Graduation: {engine.graduation_progress(final):.1f}%  graduated={final.graduated}")
    typer.echo(f"Trader shares: {result.portfolio.shares:,.2f}  net base: {result.portfolio.net_base:+.8f}")
