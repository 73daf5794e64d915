"""Parameter table definition for DuctCalc.

Thirteen slots with fixed roles.  Slots 0–5 are user inputs that may be
locked; slots 6–12 are engine outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from ductcalc.core.values import DualUnitValue
from ductcalc.utils.constants import (
    CFM_TO_LS,
    FPM_TO_MS,
    FT2_TO_M2,
    INCH_TO_MM,
    INWC_PER_100FT_TO_PA_PER_M,
    INWC_TO_PA,
)


class Slot(IntEnum):
    """Parameter table index."""

    FLOW_RATE = 0
    HEAD_LOSS = 1
    VELOCITY = 2
    EQUIVALENT_DIAMETER = 3
    DUCT_X = 4
    DUCT_Y = 5
    EQUIVALENT_DIAMETER_ECHO = 6
    FLOW_AREA = 7
    VELOCITY_ECHO = 8
    REYNOLDS = 9
    FRICTION_FACTOR = 10
    VELOCITY_PRESSURE = 11
    HEAD_LOSS_ECHO = 12

    @property
    def editable(self) -> bool:
        return self <= Slot.DUCT_Y


EDITABLE_SLOTS = tuple(s for s in Slot if s.editable)


class Change(Enum):
    """What started a recompute pass."""

    FLOW_RATE = "flow_rate"
    HEAD_LOSS = "head_loss"
    VELOCITY = "velocity"
    EQUIVALENT_DIAMETER = "equivalent_diameter"
    DUCT_X = "duct_x"
    DUCT_Y = "duct_y"
    FLUID_PROPERTIES = "fluid_properties"

    @classmethod
    def from_slot(cls, slot: int) -> Change:
        """Change for an edit of an editable slot.

        Raises:
            ValueError: If *slot* is not editable.
        """
        try:
            return _SLOT_CHANGES[Slot(slot)]
        except (KeyError, ValueError):
            raise ValueError(f"Slot {slot} is not an editable parameter") from None


_SLOT_CHANGES = {
    Slot.FLOW_RATE: Change.FLOW_RATE,
    Slot.HEAD_LOSS: Change.HEAD_LOSS,
    Slot.VELOCITY: Change.VELOCITY,
    Slot.EQUIVALENT_DIAMETER: Change.EQUIVALENT_DIAMETER,
    Slot.DUCT_X: Change.DUCT_X,
    Slot.DUCT_Y: Change.DUCT_Y,
}


@dataclass(frozen=True)
class ParameterSpec:
    """Static description of one parameter slot."""

    slot: Slot
    key: str  # snapshot / CLI key
    name: str
    imperial_unit: str
    metric_unit: str
    factor: float
    default_imperial: float
    default_metric: float
    pint_unit: str | None = None

    @property
    def read_only(self) -> bool:
        return not self.slot.editable


PARAMETER_SPECS: tuple[ParameterSpec, ...] = (
    ParameterSpec(Slot.FLOW_RATE, "flow_rate", "Flow Rate", "ft³/min", "L/s",
                  CFM_TO_LS, 500.0, 236.0, "ft**3/min"),
    ParameterSpec(Slot.HEAD_LOSS, "head_loss", "Head Loss", "in WC/100 ft", "Pa/m",
                  INWC_PER_100FT_TO_PA_PER_M, 0.080, 0.653),
    ParameterSpec(Slot.VELOCITY, "velocity", "Fluid Velocity", "fpm", "m/s",
                  FPM_TO_MS, 732.5, 3.712, "ft/min"),
    ParameterSpec(Slot.EQUIVALENT_DIAMETER, "equivalent_diameter", "Equivalent Diameter",
                  "in", "mm", INCH_TO_MM, 11.2, 284.2, "inch"),
    ParameterSpec(Slot.DUCT_X, "duct_x", "Duct Size X", "in", "mm",
                  INCH_TO_MM, 10.0, 250.0, "inch"),
    ParameterSpec(Slot.DUCT_Y, "duct_y", "Duct Size Y", "in", "mm",
                  INCH_TO_MM, 10.0, 275.0, "inch"),
    ParameterSpec(Slot.EQUIVALENT_DIAMETER_ECHO, "equivalent_diameter_calc",
                  "Equivalent Diameter", "in", "mm", INCH_TO_MM, 10.93, 286.55, "inch"),
    ParameterSpec(Slot.FLOW_AREA, "flow_area", "Flow Area", "ft²", "m²",
                  FT2_TO_M2, 0.6518, 0.0645, "ft**2"),
    ParameterSpec(Slot.VELOCITY_ECHO, "velocity_calc", "Fluid Velocity", "fpm", "m/s",
                  FPM_TO_MS, 767.1, 3.659, "ft/min"),
    ParameterSpec(Slot.REYNOLDS, "reynolds", "Reynolds Number", "", "",
                  1.0, 72793.0, 70534.0),
    ParameterSpec(Slot.FRICTION_FACTOR, "friction_factor", "Friction Factor", "", "",
                  1.0, 0.02218, 0.02219),
    ParameterSpec(Slot.VELOCITY_PRESSURE, "velocity_pressure", "Velocity Pressure",
                  "in WC", "Pa", INWC_TO_PA, 0.0367, 8.044),
    ParameterSpec(Slot.HEAD_LOSS_ECHO, "head_loss_calc", "Head Loss", "in WC", "Pa",
                  INWC_TO_PA, 0.089, 0.624),
)

SPECS_BY_KEY = {spec.key: spec for spec in PARAMETER_SPECS}


def make_parameter(spec: ParameterSpec) -> DualUnitValue:
    """Create a slot value seeded with its display defaults."""
    value = DualUnitValue(
        spec.name,
        imperial_unit=spec.imperial_unit,
        metric_unit=spec.metric_unit,
        factor=spec.factor,
        read_only=spec.read_only,
        pint_unit=spec.pint_unit,
    )
    value.set_both(spec.default_imperial, spec.default_metric)
    return value


def make_parameter_table() -> list[DualUnitValue]:
    """Create the 13-slot parameter table with defaults."""
    return [make_parameter(spec) for spec in PARAMETER_SPECS]
