"""DuctCalc command-line interface.

Entry point for the ``ductcalc`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ductcalc import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Log calculation passes (DEBUG).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """DuctCalc — HVAC duct sizing.

    Sizes rectangular ducts from flow rate, friction rate, velocity or
    dimensions, keeping every related quantity consistent.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


# Import and register sub-commands
from ductcalc.cli.size_cmd import size  # noqa: E402
from ductcalc.cli.chart_cmd import chart  # noqa: E402
from ductcalc.cli.conditions_cmd import conditions  # noqa: E402

cli.add_command(size)
cli.add_command(chart)
cli.add_command(conditions)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
