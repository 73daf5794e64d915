"""Utility modules for DuctCalc."""

from ductcalc.utils.constants import STANDARD_AIR_DENSITY
from ductcalc.utils.units import convert, get_unit_registry

__all__ = ["STANDARD_AIR_DENSITY", "convert", "get_unit_registry"]
