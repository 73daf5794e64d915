"""Dual-unit values for DuctCalc.

A :class:`DualUnitValue` holds one quantity in two unit systems.  The
imperial (primary) number is authoritative and the metric (secondary)
number is derived from it through a fixed factor, unless both sides were
set explicitly with :meth:`DualUnitValue.set_both`.
"""

from __future__ import annotations

import re
from typing import Callable

from ductcalc.utils.units import convert

ValueListener = Callable[["DualUnitValue", str], None]

_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")


def parse_number(text: str) -> float | None:
    """Parse a user-entered number.

    Accepts an optional sign, digits with at most one decimal point and an
    optional exponent, surrounded by optional whitespace.

    Returns:
        The parsed value, or None if *text* is not a complete number.
    """
    if not _NUMBER_RE.match(text):
        return None
    return float(text)


def format_value(value: float) -> str:
    """Format a value for display with four decimal places."""
    return f"{value:.4f}"


class DualUnitValue:
    """A quantity kept in an imperial and a metric representation.

    Args:
        name: Display name, e.g. "Flow Rate".
        imperial_unit: Imperial unit label, e.g. "ft³/min".
        metric_unit: Metric unit label, e.g. "L/s".
        factor: Imperial → metric multiplier.  0 disables conversion and
            keeps the two sides independent.
        read_only: True for values only the engine may write.
        pint_unit: pint expression of the imperial unit, if it has one.
    """

    def __init__(
        self,
        name: str,
        imperial_unit: str = "",
        metric_unit: str = "",
        factor: float = 1.0,
        read_only: bool = False,
        pint_unit: str | None = None,
    ):
        self.name = name
        self.imperial_unit = imperial_unit
        self.metric_unit = metric_unit
        self.factor = factor
        self.read_only = read_only
        self.pint_unit = pint_unit
        self.locked = False
        self._primary = 0.0
        self._secondary: float | None = None
        self._listeners: list[ValueListener] = []

    # --- Representations ---

    @property
    def primary(self) -> float:
        """Imperial value."""
        return self._primary

    @property
    def secondary(self) -> float:
        """Metric value."""
        if self._secondary is not None:
            return self._secondary
        return self._primary * self.factor

    @property
    def effectively_read_only(self) -> bool:
        """True when neither the user nor the engine may recompute it."""
        return self.read_only or self.locked

    # --- Mutation ---

    def set_primary(self, value: float) -> bool:
        """Set the imperial value; the metric value follows.

        Returns:
            True if either representation changed.
        """
        old = (self.primary, self.secondary)
        self._primary = value
        self._secondary = None if self.factor != 0 else old[1]
        return self._changed(old, "primary")

    def set_secondary(self, value: float) -> bool:
        """Set the metric value; the imperial value follows."""
        old = (self.primary, self.secondary)
        if self.factor != 0:
            self._primary = value / self.factor
            self._secondary = None
        else:
            self._secondary = value
        return self._changed(old, "secondary")

    def set_both(self, primary: float, secondary: float) -> bool:
        """Set both representations verbatim without deriving either."""
        old = (self.primary, self.secondary)
        self._primary = primary
        self._secondary = secondary
        return self._changed(old, "both")

    def set_value(self, value: float, metric: bool = False) -> bool:
        """Set whichever side *metric* selects."""
        if metric:
            return self.set_secondary(value)
        return self.set_primary(value)

    def value(self, metric: bool = False) -> float:
        return self.secondary if metric else self.primary

    # --- Text access ---

    @property
    def primary_text(self) -> str:
        return format_value(self.primary)

    @property
    def secondary_text(self) -> str:
        return format_value(self.secondary)

    def set_primary_text(self, text: str) -> bool:
        """Parse *text* into the imperial value.

        Returns:
            False if the text is not a valid number (value left unchanged).
        """
        parsed = parse_number(text)
        if parsed is None:
            return False
        self.set_primary(parsed)
        return True

    def set_secondary_text(self, text: str) -> bool:
        """Parse *text* into the metric value."""
        parsed = parse_number(text)
        if parsed is None:
            return False
        self.set_secondary(parsed)
        return True

    # --- Unit conversion ---

    def to(self, unit: str) -> float:
        """Express the imperial value in any compatible pint unit.

        Raises:
            ValueError: If this value has no pint unit.
        """
        if self.pint_unit is None:
            raise ValueError(f"{self.name} has no convertible unit")
        return convert(self.primary, self.pint_unit, unit)

    # --- Notification ---

    def subscribe(self, listener: ValueListener) -> None:
        """Call *listener(value, field)* whenever this value changes."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ValueListener) -> None:
        self._listeners.remove(listener)

    def _changed(self, old: tuple[float, float], field: str) -> bool:
        if old == (self.primary, self.secondary):
            return False
        for listener in list(self._listeners):
            listener(self, field)
        return True

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "imperial": self.primary,
            "imperial_unit": self.imperial_unit,
            "metric": self.secondary,
            "metric_unit": self.metric_unit,
            "locked": self.locked,
            "read_only": self.read_only,
        }

    def __repr__(self) -> str:
        return (
            f"DualUnitValue('{self.name}', {self.primary_text} {self.imperial_unit}, "
            f"{self.secondary_text} {self.metric_unit})"
        )
