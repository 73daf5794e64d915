"""Unit conversion utilities for DuctCalc.

The calculation engine only knows the fixed imperial/metric pair of each
parameter.  This module sits at the input boundary: it uses pint to turn
free-form quantities such as ``"236 L/s"`` into the imperial unit a
parameter expects.
"""

from __future__ import annotations

from functools import lru_cache

import pint

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()
_ureg.default_format = "~P"  # short pretty format


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity


class UnitConversionError(ValueError):
    """Raised when a quantity cannot be parsed or converted."""


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string.
        to_unit: Target unit string.

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude


def conversion_factor(from_unit: str, to_unit: str) -> float:
    """Multiplier that takes a value in *from_unit* to *to_unit*."""
    return convert(1.0, from_unit, to_unit)


def parse_quantity(text: str, unit: str | None) -> tuple[float, bool]:
    """Parse a CLI quantity and express it in *unit*.

    A bare number is returned unchanged.  A number followed by a unit is
    converted to *unit*; this requires the parameter to declare a pint unit.

    Args:
        text: User input, e.g. ``"500"``, ``"236 L/s"`` or ``"250 mm"``.
        unit: Target pint unit expression, or None for unit-less parameters.

    Returns:
        ``(value, had_unit)`` where *had_unit* tells whether a unit was given.

    Raises:
        UnitConversionError: If the text is not a quantity, the unit is
            unknown, or it is not compatible with *unit*.
    """
    text = text.strip()
    try:
        return float(text), False
    except ValueError:
        pass

    if unit is None:
        raise UnitConversionError(f"'{text}' must be a plain number")

    try:
        quantity = _ureg.Quantity(text)
        magnitude = quantity.to(unit).magnitude
    except pint.errors.DimensionalityError as exc:
        raise UnitConversionError(f"'{text}' cannot be expressed in {unit}") from exc
    except Exception as exc:
        raise UnitConversionError(f"Cannot parse quantity '{text}'") from exc
    return float(magnitude), True
