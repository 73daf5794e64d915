"""Fluid property presets for DuctCalc.

The fluid table has four entries: density, viscosity, specific heat and
energy factor.  Density and viscosity feed the duct formulas; specific
heat and energy factor are carried for energy calculations downstream.

Presets store both representations verbatim as tabulated, so the metric
side is not re-derived from the factor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from ductcalc.core.values import DualUnitValue
from ductcalc.utils.constants import (
    BTULBF_TO_KJKGC,
    ENERGY_FACTOR_TO_SI,
    LBFT3_TO_KGM3,
    LBFTH_TO_KGMH,
    LBFTH_TO_KGMH_WATER,
)

logger = logging.getLogger(__name__)


class FluidPresetError(Exception):
    """Raised when a fluid preset is not known."""


class FluidProperty(IntEnum):
    """Fluid table index."""

    DENSITY = 0
    VISCOSITY = 1
    SPECIFIC_HEAT = 2
    ENERGY_FACTOR = 3


@dataclass(frozen=True)
class FluidPreset:
    """Tabulated fluid properties as (imperial, metric) pairs."""

    name: str
    density: tuple[float, float]  # lb/ft³, kg/m³
    viscosity: tuple[float, float]  # lb/(ft·h), kg/(m·h)
    specific_heat: tuple[float, float]  # Btu/(lb·°F), kJ/(kg·°C)
    energy_factor: tuple[float, float]  # Btu/(h·°F·ft³/min), W/(°C·L/s)
    viscosity_factor: float = LBFTH_TO_KGMH
    status: str = ""

    @property
    def loaded_message(self) -> str:
        return self.status or f"{self.name} properties loaded"


AIR_CONDITIONS: tuple[FluidPreset, ...] = (
    FluidPreset(
        "68°F/20°C Air @ STP",
        density=(0.075, 1.2014),
        viscosity=(0.0473, 0.0705),
        specific_heat=(0.24, 1.0048),
        energy_factor=(0.96, 1.08),
    ),
    FluidPreset(
        "55°F/13°C Air @ 97% RH & 1 ATM",
        density=(0.0765, 1.2254),
        viscosity=(0.0481, 0.0716),
        specific_heat=(0.2405, 1.0069),
        energy_factor=(0.978, 1.1003),
    ),
    FluidPreset(
        "75°F/25°C Air @ 50% RH & 1 ATM",
        density=(0.0735, 1.1774),
        viscosity=(0.0463, 0.0689),
        specific_heat=(0.2415, 1.0111),
        energy_factor=(0.945, 1.0631),
    ),
    FluidPreset(
        "100°F/37°C Air @ 23% RH & 1 ATM",
        density=(0.0694, 1.1118),
        viscosity=(0.0437, 0.0651),
        specific_heat=(0.243, 1.0174),
        energy_factor=(0.894, 1.0058),
    ),
    FluidPreset(
        "125°F/52°C Air @ 11% RH & 1 ATM",
        density=(0.0652, 1.0446),
        viscosity=(0.0411, 0.0612),
        specific_heat=(0.2445, 1.0237),
        energy_factor=(0.842, 0.9473),
    ),
)

FLUID_PRESETS: dict[str, FluidPreset] = {
    "air": FluidPreset(
        "Air",
        density=(0.075, 1.2014),
        viscosity=(0.0473, 0.0705),
        specific_heat=(0.24, 1.0048),
        energy_factor=(0.96, 1.08),
        status="Air properties loaded",
    ),
    "water": FluidPreset(
        "Water",
        density=(62.3, 998.0),
        viscosity=(0.671, 1.0),
        specific_heat=(1.0, 4.1868),
        energy_factor=(4.0, 4.5),
        viscosity_factor=LBFTH_TO_KGMH_WATER,
        status="Water properties loaded",
    ),
}


def get_condition(index: int) -> FluidPreset:
    """Return an air condition preset; unknown indices fall back to STP."""
    if 0 <= index < len(AIR_CONDITIONS):
        return AIR_CONDITIONS[index]
    logger.warning("Unknown air condition %d, using %s", index, AIR_CONDITIONS[0].name)
    return AIR_CONDITIONS[0]


def get_fluid_preset(name: str) -> FluidPreset:
    """Look up a named fluid preset (case-insensitive).

    Raises:
        FluidPresetError: If the preset is not known.
    """
    try:
        return FLUID_PRESETS[name.lower()]
    except KeyError:
        raise FluidPresetError(
            f"Fluid preset '{name}' not found. Available: {list(FLUID_PRESETS)}"
        ) from None


def list_presets() -> list[str]:
    """Names of the air conditions followed by the named fluid presets."""
    return [c.name for c in AIR_CONDITIONS] + list(FLUID_PRESETS)


def make_fluid_table() -> list[DualUnitValue]:
    """Create the four fluid property entries, without values."""
    return [
        DualUnitValue("Fluid Density", "lb/ft³", "kg/m³", LBFT3_TO_KGM3,
                      pint_unit="lb/ft**3"),
        DualUnitValue("Fluid Viscosity", "lb/ft·h", "kg/m·h", LBFTH_TO_KGMH,
                      pint_unit="lb/ft/hour"),
        DualUnitValue("Specific Heat", "Btu/lb·°F", "kJ/kg·°C", BTULBF_TO_KJKGC),
        DualUnitValue("Energy Factor", "Btu/h·°F·ft³/min", "W/°C·L/s", ENERGY_FACTOR_TO_SI),
    ]


def apply_preset(table: list[DualUnitValue], preset: FluidPreset) -> None:
    """Overwrite *table* in place with the values of *preset*."""
    table[FluidProperty.VISCOSITY].factor = preset.viscosity_factor
    table[FluidProperty.DENSITY].set_both(*preset.density)
    table[FluidProperty.VISCOSITY].set_both(*preset.viscosity)
    table[FluidProperty.SPECIFIC_HEAT].set_both(*preset.specific_heat)
    table[FluidProperty.ENERGY_FACTOR].set_both(*preset.energy_factor)
    logger.info("Loaded fluid preset: %s", preset.name)
