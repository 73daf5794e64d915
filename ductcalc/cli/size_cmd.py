"""CLI command for sizing a duct."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from ductcalc.core.config import EngineSettings, load_settings_json
from ductcalc.core.engine import PropagationEngine
from ductcalc.core.parameters import EDITABLE_SLOTS, PARAMETER_SPECS, SPECS_BY_KEY
from ductcalc.utils.units import UnitConversionError, parse_quantity
from ductcalc.utils.validation import validate_duct_design

# (option name, parameter key), applied in this order
_INPUT_OPTIONS = (
    ("flow", "flow_rate"),
    ("head_loss", "head_loss"),
    ("velocity", "velocity"),
    ("diameter", "equivalent_diameter"),
    ("x", "duct_x"),
    ("y", "duct_y"),
)

_LOCKABLE = [PARAMETER_SPECS[s].key for s in EDITABLE_SLOTS]


def _parse_input(option: str, key: str, text: str) -> tuple[float, bool]:
    spec = SPECS_BY_KEY[key]
    try:
        return parse_quantity(text, spec.pint_unit)
    except UnitConversionError as exc:
        raise click.BadParameter(str(exc), param_hint=f"--{option.replace('_', '-')}")


@click.command("size")
@click.option("--flow", type=str, help="Flow rate [ft³/min], or with a unit, e.g. '236 L/s'.")
@click.option("--head-loss", type=str, help="Head loss [in WC/100 ft].")
@click.option("--velocity", type=str, help="Fluid velocity [fpm].")
@click.option("--diameter", type=str, help="Equivalent diameter [in].")
@click.option("--x", type=str, help="Duct size X [in].")
@click.option("--y", type=str, help="Duct size Y [in].")
@click.option(
    "--lock",
    "locks",
    type=click.Choice(_LOCKABLE),
    multiple=True,
    help="Lock a parameter (repeatable). Its value is set before locking.",
)
@click.option(
    "--condition",
    type=click.IntRange(0, 4),
    default=None,
    help="Air condition preset (see 'ductcalc conditions').",
)
@click.option("--fluid", type=click.Choice(["air", "water"]), default=None, help="Fluid preset.")
@click.option("--metric", is_flag=True, help="Read bare numbers in metric units.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Engine settings file (JSON).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def size(
    ctx: click.Context,
    flow: str | None,
    head_loss: str | None,
    velocity: str | None,
    diameter: str | None,
    x: str | None,
    y: str | None,
    locks: tuple[str, ...],
    condition: int | None,
    fluid: str | None,
    metric: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Size a duct from any combination of known parameters.

    Values are applied as successive edits, each one recomputing the
    parameters that depend on it.  Each locked parameter is set and locked
    in --lock order before the remaining values are applied.
    """
    console: Console = ctx.obj.get("console", Console())

    settings = EngineSettings()
    if config_path:
        try:
            settings = load_settings_json(config_path)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--config")

    given = {"flow": flow, "head_loss": head_loss, "velocity": velocity,
             "diameter": diameter, "x": x, "y": y}
    edits: dict[str, tuple[float, bool]] = {}
    for option, key in _INPUT_OPTIONS:
        text = given[option]
        if text is None:
            continue
        value, had_unit = _parse_input(option, key, text)
        edits[key] = (value, metric and not had_unit)

    engine = PropagationEngine(settings)
    if condition is not None:
        engine.load_condition(condition)
    if fluid is not None:
        engine.load_fluid(fluid)

    for key in locks:
        slot = SPECS_BY_KEY[key].slot
        if key in edits:
            value, in_metric = edits[key]
            engine.edit(slot, value, metric=in_metric)
        engine.set_locked(slot, True)
        if not engine.parameter(slot).locked:
            console.print(f"[red]{engine.status}[/red]")
            raise SystemExit(1)

    for key, (value, in_metric) in edits.items():
        if key not in locks:
            engine.edit(SPECS_BY_KEY[key].slot, value, metric=in_metric)

    warnings = validate_duct_design(engine.values())

    if as_json:
        data = engine.snapshot()
        data["warnings"] = [m.message for m in warnings.messages]
        click.echo(json.dumps(data, indent=2))
    else:
        _print_result(console, engine)
        for m in warnings.messages:
            console.print(f"[yellow]⚠ {m.message}[/yellow]")

    if engine.status.startswith("Calculation error"):
        if not as_json:
            console.print(f"[red]{engine.status}[/red]")
        raise SystemExit(1)


def _print_result(console: Console, engine: PropagationEngine) -> None:
    console.print(f"\n[bold]DuctCalc — Duct Sizing ({engine.condition_name})[/bold]\n")

    table = Table(title="Duct Parameters")
    table.add_column("Parameter", style="cyan")
    table.add_column("Imperial", style="green", justify="right")
    table.add_column("Unit", style="dim")
    table.add_column("Metric", style="green", justify="right")
    table.add_column("Unit", style="dim")
    table.add_column("Lock", justify="center")

    for spec, param in zip(PARAMETER_SPECS, engine.parameters):
        if spec.read_only:
            lock = "—"
        else:
            lock = "yes" if param.locked else ""
        table.add_row(
            param.name,
            param.primary_text,
            param.imperial_unit or "—",
            param.secondary_text,
            param.metric_unit or "—",
            lock,
        )
    console.print(table)

    fluid = Table(title="Fluid Properties")
    fluid.add_column("Property", style="cyan")
    fluid.add_column("Imperial", style="green", justify="right")
    fluid.add_column("Unit", style="dim")
    fluid.add_column("Metric", style="green", justify="right")
    fluid.add_column("Unit", style="dim")
    for entry in engine.fluid_properties:
        fluid.add_row(
            entry.name,
            entry.primary_text,
            entry.imperial_unit,
            entry.secondary_text,
            entry.metric_unit,
        )
    console.print(fluid)
    console.print(f"\n[dim]{engine.status}[/dim]")
