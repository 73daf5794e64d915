"""CLI command for listing air conditions and fluid presets."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ductcalc.core.fluids import AIR_CONDITIONS, FLUID_PRESETS, FluidPreset


@click.command("conditions")
@click.option("--metric", is_flag=True, help="Show metric values.")
@click.pass_context
def conditions(ctx: click.Context, metric: bool) -> None:
    """List available air conditions and fluid presets."""
    console: Console = ctx.obj.get("console", Console())
    side = 1 if metric else 0

    table = Table(title="Available Fluid Presets")
    table.add_column("ID", style="cyan")
    table.add_column("Condition", style="green")
    table.add_column("Density [kg/m³]" if metric else "Density [lb/ft³]", justify="right")
    table.add_column("Viscosity [kg/m·h]" if metric else "Viscosity [lb/ft·h]", justify="right")
    table.add_column("cp [kJ/kg·°C]" if metric else "cp [Btu/lb·°F]", justify="right")
    table.add_column("Energy Factor", justify="right")

    rows: list[tuple[str, FluidPreset]] = [(str(i), c) for i, c in enumerate(AIR_CONDITIONS)]
    rows += list(FLUID_PRESETS.items())
    for preset_id, preset in rows:
        table.add_row(
            preset_id,
            preset.name,
            f"{preset.density[side]:g}",
            f"{preset.viscosity[side]:g}",
            f"{preset.specific_heat[side]:g}",
            f"{preset.energy_factor[side]:g}",
        )
    console.print(table)
