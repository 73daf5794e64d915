"""DuctCalc command-line interface package.

Supports ``python -m ductcalc.cli`` as an alternative to the ``ductcalc`` entry point.
"""

from ductcalc.cli.main import cli, main

__all__ = ["cli", "main"]
