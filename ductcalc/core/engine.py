"""Parameter propagation engine for DuctCalc.

The engine owns the 13-slot parameter table and the 4-entry fluid table.
When one input changes it recomputes the dependent quantities in a fixed
order:

    De → Flow Area → Velocity/Flow → Duct sides → Re/f/VP → Head Loss

Locked inputs are never overwritten.  A pass is single-flight: any edit or
recompute request made while a pass is running (for example from a value
listener) is not propagated.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ductcalc.core.config import EngineSettings
from ductcalc.core.fluids import (
    FluidPreset,
    FluidProperty,
    apply_preset,
    get_condition,
    get_fluid_preset,
    make_fluid_table,
)
from ductcalc.core.formulas import (
    duct_side_from_flow,
    duct_size_x_from_de,
    duct_size_y_from_de,
    equivalent_diameter,
    flow_area,
    flow_from_velocity,
    friction_factor,
    head_loss_darcy_weisbach,
    reynolds_number,
    solve_equivalent_diameter,
    standard_air_diameter,
    velocity_from_flow,
    velocity_pressure,
)
from ductcalc.core.locks import lock_error
from ductcalc.core.parameters import (
    EDITABLE_SLOTS,
    PARAMETER_SPECS,
    Change,
    Slot,
    make_parameter_table,
)
from ductcalc.core.values import DualUnitValue, parse_number

logger = logging.getLogger(__name__)

STATUS_UPDATED = "Calculations updated"


class EngineState(Enum):
    """Propagation engine state."""

    IDLE = "idle"
    RECOMPUTING = "recomputing"


class PropagationEngine:
    """Keeps the duct parameter table consistent after each edit.

    Every public entry point returns the status string, which is also kept
    in :attr:`status`.

    Usage::

        engine = PropagationEngine()
        engine.edit(Slot.FLOW_RATE, 800.0)
        engine.set_locked(Slot.VELOCITY, True)
        table = engine.snapshot()

    Args:
        settings: Engine tunables; defaults are used when omitted.
    """

    def __init__(self, settings: EngineSettings | None = None):
        self.settings = settings or EngineSettings()
        self._parameters = make_parameter_table()
        self._fluid = make_fluid_table()
        self._state = EngineState.IDLE
        self._pass_failed = False

        preset = get_condition(self.settings.default_condition)
        apply_preset(self._fluid, preset)
        self.condition_name = preset.name
        self.status = "Application initialized"

    # --- Table access ---

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def parameters(self) -> tuple[DualUnitValue, ...]:
        return tuple(self._parameters)

    @property
    def fluid_properties(self) -> tuple[DualUnitValue, ...]:
        return tuple(self._fluid)

    def parameter(self, slot: int) -> DualUnitValue:
        """Slot value; raises ValueError for an unknown slot."""
        return self._parameters[Slot(slot)]

    def value(self, slot: int, metric: bool = False) -> float:
        return self.parameter(slot).value(metric)

    def locked_slots(self) -> list[Slot]:
        return [s for s in EDITABLE_SLOTS if self._parameters[s].locked]

    def values(self) -> dict[str, float]:
        """Imperial values keyed by parameter key."""
        return {spec.key: self._parameters[spec.slot].primary for spec in PARAMETER_SPECS}

    def snapshot(self) -> dict[str, Any]:
        """Both tables with both representations, plus the status."""
        return {
            "parameters": {
                spec.key: self._parameters[spec.slot].as_dict() for spec in PARAMETER_SPECS
            },
            "fluid": [entry.as_dict() for entry in self._fluid],
            "condition": self.condition_name,
            "status": self.status,
        }

    # --- Edits ---

    def edit(self, slot: int, value: float, metric: bool = False) -> str:
        """Set an input parameter and propagate the change.

        Read-only slots are refused.  A locked slot takes the new value but
        nothing is recomputed from it.
        """
        param = self.parameter(slot)
        if param.read_only:
            self.status = f"{param.name} is read-only"
            return self.status

        # Compare only the edited side; the other may hold a verbatim seed
        if param.value(metric) == value or not param.set_value(value, metric):
            return self.status

        if self._state is EngineState.RECOMPUTING:
            logger.debug("Edit of %s during a pass, not propagated", param.name)
            return self.status

        if param.effectively_read_only:
            logger.debug("Parameter changed: %s (slot %d) - locked, skipping", param.name, slot)
            return self.status

        logger.debug("Parameter changed: %s (slot %d)", param.name, slot)
        return self.recompute(Change.from_slot(slot))

    def edit_text(self, slot: int, text: str, metric: bool = False) -> str:
        """Parse *text* and apply it as :meth:`edit`; invalid text changes nothing."""
        parsed = parse_number(text)
        if parsed is None:
            self.status = f"Invalid number: '{text}'"
            return self.status
        return self.edit(slot, parsed, metric)

    def edit_fluid(self, index: int, value: float, metric: bool = False) -> str:
        """Set one fluid property and recompute everything downstream."""
        entry = self._fluid[FluidProperty(index)]
        if entry.value(metric) == value or not entry.set_value(value, metric):
            return self.status
        if self._state is EngineState.RECOMPUTING:
            return self.status
        logger.debug("Fluid property changed: %s", entry.name)
        return self.recompute(Change.FLUID_PROPERTIES)

    def set_locked(self, slot: int, locked: bool) -> str:
        """Lock or unlock an input parameter.

        A lock that would overdetermine the system is rolled back and the
        rule message becomes the status.  An accepted toggle runs a pass
        as if the toggled parameter had just been edited, so locking
        Velocity re-derives Flow Rate from it and locking Head Loss
        re-solves the equivalent diameter.

        Raises:
            ValueError: If *slot* is not an input parameter.
        """
        change = Change.from_slot(slot)
        param = self._parameters[slot]
        if param.locked == locked:
            return self.status

        param.locked = locked
        if locked:
            message = lock_error(self.locked_slots())
            if message:
                param.locked = False
                logger.debug("Lock rejected: %s", message)
                self.status = message
                return self.status

        self.recompute(change)
        if not self._pass_failed:
            self.status = f"{param.name} {'locked' if locked else 'unlocked'}"
        return self.status

    def load_condition(self, index: int) -> str:
        """Load one of the air condition presets (0–4)."""
        return self._load_preset(get_condition(index))

    def load_fluid(self, name: str) -> str:
        """Replace the fluid table with the ``air`` or ``water`` preset."""
        return self._load_preset(get_fluid_preset(name))

    def refresh(self) -> str:
        """Manual refresh request; nothing to recompute yet."""
        self.status = "Data refreshed"
        return self.status

    def _load_preset(self, preset: FluidPreset) -> str:
        apply_preset(self._fluid, preset)
        self.condition_name = preset.name
        self.recompute(Change.FLUID_PROPERTIES)
        if not self._pass_failed:
            self.status = preset.loaded_message
        return self.status

    # --- Recompute ---

    def recompute(self, change: Change) -> str:
        """Run one propagation pass for *change*.

        Faults inside the pass become a status message; the engine always
        returns to IDLE.  A fluid-property pass is followed by one head-loss
        pass so head loss settles against the new friction factor.
        """
        if self._state is EngineState.RECOMPUTING:
            logger.debug("Recompute for %s requested during a pass, ignored", change.value)
            return self.status

        self._state = EngineState.RECOMPUTING
        try:
            self._propagate(change)
            self.status = STATUS_UPDATED
            self._pass_failed = False
        except Exception as exc:
            logger.exception("Error in recompute pass for %s", change.value)
            self.status = f"Calculation error: {exc}"
            self._pass_failed = True
        finally:
            self._state = EngineState.IDLE

        if change is Change.FLUID_PROPERTIES:
            failed, status = self._pass_failed, self.status
            self.recompute(Change.HEAD_LOSS)
            if failed:
                # A fault in the fluid pass outlives the cascade
                self._pass_failed = True
                self.status = status
        return self.status

    def _propagate(self, change: Change) -> None:
        p = self._parameters
        density = self._fluid[FluidProperty.DENSITY].primary
        viscosity = self._fluid[FluidProperty.VISCOSITY].primary

        flow = p[Slot.FLOW_RATE].primary
        head_loss = p[Slot.HEAD_LOSS].primary
        x = p[Slot.DUCT_X].primary
        y = p[Slot.DUCT_Y].primary
        logger.debug("Recompute pass: %s", change.value)

        # Equivalent diameter from whichever input drives it
        if not p[Slot.EQUIVALENT_DIAMETER].locked:
            de = self._source_diameter(change, flow, head_loss, x, y, density, viscosity)
            if de is not None:
                self._update(Slot.EQUIVALENT_DIAMETER, de)

        de = p[Slot.EQUIVALENT_DIAMETER].primary
        self._update_echo(Slot.EQUIVALENT_DIAMETER_ECHO, de)
        area = flow_area(de)
        self._update_echo(Slot.FLOW_AREA, area)

        # Velocity from flow, or flow from an edited velocity
        if change is not Change.VELOCITY and flow > 0 and area > 0:
            self._update(Slot.VELOCITY, velocity_from_flow(flow, area))
        velocity = p[Slot.VELOCITY].primary

        if change is Change.VELOCITY and velocity > 0 and area > 0:
            self._update(Slot.FLOW_RATE, flow_from_velocity(velocity, area))
        flow = p[Slot.FLOW_RATE].primary
        self._update_echo(Slot.VELOCITY_ECHO, velocity)

        self._resolve_dimensions(change, flow, velocity, x, y, de)

        de = p[Slot.EQUIVALENT_DIAMETER].primary
        if viscosity > 0 and de > 0:
            re = reynolds_number(density, velocity, de, viscosity)
            self._update_echo(Slot.REYNOLDS, re)
            f = friction_factor(re, self.settings.roughness)
            self._update_echo(Slot.FRICTION_FACTOR, f)
            self._update_echo(Slot.VELOCITY_PRESSURE, velocity_pressure(velocity, density))

            # An edited head loss is authoritative
            if change is not Change.HEAD_LOSS and flow > 0 and f > 0:
                self._update(
                    Slot.HEAD_LOSS, head_loss_darcy_weisbach(f, de, velocity, density)
                )
            self._update_echo(Slot.HEAD_LOSS_ECHO, p[Slot.HEAD_LOSS].primary)

    def _source_diameter(
        self,
        change: Change,
        flow: float,
        head_loss: float,
        x: float,
        y: float,
        density: float,
        viscosity: float,
    ) -> float | None:
        """New equivalent diameter for *change*, or None to leave it alone."""
        has_dimensions = x > 0 and y > 0

        if change in (Change.DUCT_X, Change.DUCT_Y, Change.VELOCITY):
            return equivalent_diameter(x, y) if has_dimensions else None

        if change is Change.HEAD_LOSS:
            if flow <= 0 or head_loss <= 0:
                return None
            solution = solve_equivalent_diameter(
                flow,
                head_loss,
                density,
                viscosity,
                max_iterations=self.settings.max_iterations,
                tolerance=self.settings.tolerance,
                roughness=self.settings.roughness,
            )
            if solution.diameter <= 0:
                # Invalid fluid properties give no diameter; keep the stored one
                logger.debug("No diameter from head loss, keeping the current one")
                return None
            if not solution.converged:
                logger.debug(
                    "Diameter solve stopped after %d iterations (error %.4g)",
                    solution.iterations,
                    solution.relative_error,
                )
            return solution.diameter

        if change is Change.FLOW_RATE:
            if flow > 0 and head_loss > 0 and not has_dimensions:
                return standard_air_diameter(flow, head_loss)
            return None

        # EQUIVALENT_DIAMETER is its own source; FLUID_PROPERTIES keeps it
        return None

    def _resolve_dimensions(
        self,
        change: Change,
        flow: float,
        velocity: float,
        x: float,
        y: float,
        de: float,
    ) -> None:
        """Update the duct sides; the first matching rule wins."""
        p = self._parameters
        x_locked = p[Slot.DUCT_X].locked
        y_locked = p[Slot.DUCT_Y].locked
        flow_and_velocity_locked = p[Slot.FLOW_RATE].locked and p[Slot.VELOCITY].locked
        flow_known = flow > 0 and velocity > 0

        if (
            flow_and_velocity_locked
            and change is Change.DUCT_X
            and not y_locked
            and x > 0
            and flow_known
        ):
            y = duct_side_from_flow(flow, velocity, x)
            self._update(Slot.DUCT_Y, y)
            self._update(Slot.EQUIVALENT_DIAMETER, equivalent_diameter(x, y))
        elif (
            flow_and_velocity_locked
            and change is Change.DUCT_Y
            and not x_locked
            and y > 0
            and flow_known
        ):
            x = duct_side_from_flow(flow, velocity, y)
            self._update(Slot.DUCT_X, x)
            self._update(Slot.EQUIVALENT_DIAMETER, equivalent_diameter(x, y))
        elif change is Change.EQUIVALENT_DIAMETER and not y_locked and x > 0 and de > 0:
            # Hold X, follow with Y
            self._update(Slot.DUCT_Y, duct_size_y_from_de(de, x))
        elif change is Change.DUCT_X and not y_locked and x > 0 and de > 0:
            self._update(Slot.DUCT_Y, duct_size_y_from_de(de, x))
        elif change is Change.DUCT_Y and not x_locked and y > 0 and de > 0:
            self._update(Slot.DUCT_X, duct_size_x_from_de(de, y))
        elif (
            change not in (Change.EQUIVALENT_DIAMETER, Change.DUCT_X, Change.DUCT_Y)
            and not y_locked
            and x > 0
            and de > 0
        ):
            self._update(Slot.DUCT_Y, duct_size_y_from_de(de, x))

    # --- Writes ---

    def _update(self, slot: Slot, value: float) -> None:
        """Write an input slot unless it is locked."""
        param = self._parameters[slot]
        if param.locked:
            logger.debug("Skipping update of locked parameter: %s", param.name)
            return
        param.set_both(value, value * param.factor)

    def _update_echo(self, slot: Slot, value: float) -> None:
        """Write an output slot."""
        param = self._parameters[slot]
        param.set_both(value, value * param.factor)

    def __repr__(self) -> str:
        return f"PropagationEngine(state={self._state.value}, status={self.status!r})"
