"""CLI command for a friction chart table."""

from __future__ import annotations

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from ductcalc.core.config import EngineSettings, load_settings_json
from ductcalc.core.fluids import get_condition
from ductcalc.core.formulas import (
    flow_area,
    friction_factor,
    reynolds_number,
    solve_equivalent_diameter,
    velocity_from_flow,
)


@click.command("chart")
@click.option(
    "--head-loss",
    type=float,
    default=0.08,
    show_default=True,
    help="Friction rate [in WC/100 ft].",
)
@click.option("--min-flow", type=float, default=100.0, show_default=True, help="Lowest flow [ft³/min].")
@click.option("--max-flow", type=float, default=10000.0, show_default=True, help="Highest flow [ft³/min].")
@click.option("--points", type=click.IntRange(2, 100), default=9, show_default=True, help="Number of flows.")
@click.option("--condition", type=click.IntRange(0, 4), default=0, show_default=True, help="Air condition preset.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Engine settings file (JSON).",
)
@click.pass_context
def chart(
    ctx: click.Context,
    head_loss: float,
    min_flow: float,
    max_flow: float,
    points: int,
    condition: int,
    config_path: str | None,
) -> None:
    """Round-duct sizes for a constant friction rate over a range of flows."""
    console: Console = ctx.obj.get("console", Console())

    if head_loss <= 0 or min_flow <= 0 or max_flow <= min_flow:
        console.print(
            "[red]Error:[/red] Need --head-loss > 0 and 0 < --min-flow < --max-flow."
        )
        raise SystemExit(1)

    settings = EngineSettings()
    if config_path:
        try:
            settings = load_settings_json(config_path)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--config")
    preset = get_condition(condition)
    density, viscosity = preset.density[0], preset.viscosity[0]

    table = Table(title=f"Friction Chart — {head_loss:g} in WC/100 ft, {preset.name}")
    table.add_column("Flow [ft³/min]", style="cyan", justify="right")
    table.add_column("De [in]", style="green", justify="right")
    table.add_column("Velocity [fpm]", justify="right")
    table.add_column("Re", justify="right")
    table.add_column("f", justify="right")
    table.add_column("Iter.", style="dim", justify="right")

    for flow in np.geomspace(min_flow, max_flow, points):
        flow = float(flow)
        solution = solve_equivalent_diameter(
            flow,
            head_loss,
            density,
            viscosity,
            max_iterations=settings.max_iterations,
            tolerance=settings.tolerance,
            roughness=settings.roughness,
        )
        velocity = velocity_from_flow(flow, flow_area(solution.diameter))
        re = reynolds_number(density, velocity, solution.diameter, viscosity)
        iterations = str(solution.iterations) if solution.converged else f"{solution.iterations}*"
        table.add_row(
            f"{flow:.0f}",
            f"{solution.diameter:.2f}",
            f"{velocity:.0f}",
            f"{re:.0f}",
            f"{friction_factor(re, settings.roughness):.5f}",
            iterations,
        )

    console.print(table)
    console.print("[dim]* iteration cap reached before convergence[/dim]")
