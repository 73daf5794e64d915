"""Duct sizing formulas for DuctCalc.

Pure functions in the customary HVAC unit system: duct sizes and
equivalent diameter in inches, areas in ft², velocity in fpm, flow in
ft³/min, density in lb/ft³, viscosity in lb/(ft·h), pressure in in WC.

Every function returns 0 on an invalid domain (non-positive input or
divisor) instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ductcalc.utils.constants import (
    DARCY_WEISBACH_DIVISOR,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_RELATIVE_ROUGHNESS,
    DEFAULT_SOLVER_TOLERANCE,
    EQUIV_DIAMETER_AREA_EXP,
    EQUIV_DIAMETER_COEFF,
    EQUIV_DIAMETER_PERIMETER_EXP,
    FRICTION_RUN_LENGTH,
    INCHES_PER_FOOT,
    LAMINAR_REYNOLDS_LIMIT,
    MINUTES_PER_HOUR,
    PI,
    SOLVER_DAMPING_EXP,
    SQ_INCHES_PER_SQ_FOOT,
    STANDARD_AIR_DENSITY,
    STANDARD_AIR_DIAMETER_COEFF,
    STANDARD_AIR_DIAMETER_FLOW_EXP,
    STANDARD_AIR_DIAMETER_ROOT,
    VELOCITY_PRESSURE_FPM,
)


# --- Geometry ---


def equivalent_diameter(x: float, y: float) -> float:
    """Equivalent round diameter of a rectangular duct [in].

        De = 1.30 * (x*y)^0.625 / (x+y)^0.25

    Args:
        x: Duct width [in].
        y: Duct height [in].
    """
    if x <= 0 or y <= 0:
        return 0.0
    return (
        EQUIV_DIAMETER_COEFF
        * (x * y) ** EQUIV_DIAMETER_AREA_EXP
        / (x + y) ** EQUIV_DIAMETER_PERIMETER_EXP
    )


def flow_area(de: float) -> float:
    """Flow area [ft²] of a round duct with diameter *de* [in]."""
    if de <= 0:
        return 0.0
    return PI * (de / 2.0) ** 2 / SQ_INCHES_PER_SQ_FOOT


def duct_size_y_from_de(de: float, x: float) -> float:
    """Duct height [in] giving the same area as a round duct of *de*.

        Y = π*(De/2)² / X

    This is an area match, not the inverse of :func:`equivalent_diameter`.
    """
    if de <= 0 or x <= 0:
        return 0.0
    return PI * (de / 2.0) ** 2 / x


def duct_size_x_from_de(de: float, y: float) -> float:
    """Duct width [in] from equivalent diameter and height."""
    return duct_size_y_from_de(de, y)


def duct_side_from_flow(flow: float, velocity: float, other_side: float) -> float:
    """Rectangular side [in] carrying *flow* at *velocity*.

        side = (Q / V) * 144 / other_side
    """
    if flow <= 0 or velocity <= 0 or other_side <= 0:
        return 0.0
    return (flow / velocity) * SQ_INCHES_PER_SQ_FOOT / other_side


# --- Flow ---


def velocity_from_flow(flow: float, area: float) -> float:
    """Velocity [fpm] = flow [ft³/min] / area [ft²]."""
    if area <= 0:
        return 0.0
    return flow / area


def flow_from_velocity(velocity: float, area: float) -> float:
    """Flow [ft³/min] = velocity [fpm] × area [ft²]."""
    if area <= 0:
        return 0.0
    return velocity * area


def reynolds_number(density: float, velocity: float, de: float, viscosity: float) -> float:
    """Reynolds number from duct-sizing units.

        Re = ρ [lb/ft³] × V [fpm] × 60 [min/h] × (De/12) [ft] / μ [lb/(ft·h)]
    """
    if viscosity <= 0 or de <= 0:
        return 0.0
    return density * velocity * MINUTES_PER_HOUR * (de / INCHES_PER_FOOT) / viscosity


def friction_factor(reynolds: float, roughness: float = DEFAULT_RELATIVE_ROUGHNESS) -> float:
    """Darcy friction factor.

    Laminar ``64/Re`` below Re = 2300, Swamee-Jain otherwise:

        f = 0.25 / [log10(ε/3.7 + 5.74/Re^0.9)]²

    The two branches do not meet at Re = 2300.

    Args:
        reynolds: Reynolds number.
        roughness: Relative roughness ε (galvanized steel by default).
    """
    if reynolds <= 0:
        return 0.0
    if reynolds < LAMINAR_REYNOLDS_LIMIT:
        return 64.0 / reynolds
    log_term = math.log10(roughness / 3.7 + 5.74 / reynolds**0.9)
    return 0.25 / log_term**2


def velocity_pressure(velocity: float, density: float) -> float:
    """Velocity pressure [in WC].

        VP = (ρ/0.075) × (V/4005)²
    """
    if velocity <= 0:
        return 0.0
    return (density / STANDARD_AIR_DENSITY) * (velocity / VELOCITY_PRESSURE_FPM) ** 2


def head_loss_darcy_weisbach(
    friction: float, de: float, velocity: float, density: float
) -> float:
    """Friction loss [in WC per 100 ft].

        ΔP = f × (100 / (De/12)) × ρ V² / (2 × 1097)
    """
    if de <= 0 or velocity <= 0:
        return 0.0
    d_ft = de / INCHES_PER_FOOT
    return (
        friction
        * (FRICTION_RUN_LENGTH / d_ft)
        * (density * velocity**2)
        / (2.0 * DARCY_WEISBACH_DIVISOR)
    )


# --- Diameter from head loss ---


def standard_air_diameter(flow: float, head_loss: float) -> float:
    """Closed-form equivalent diameter [in] for standard air.

        De = (0.109136 × Q^1.9 / ΔP)^(1/5.02)
    """
    if flow <= 0 or head_loss <= 0:
        return 0.0
    return (
        STANDARD_AIR_DIAMETER_COEFF * flow**STANDARD_AIR_DIAMETER_FLOW_EXP / head_loss
    ) ** (1.0 / STANDARD_AIR_DIAMETER_ROOT)


@dataclass
class DiameterSolution:
    """Result of the iterative diameter-from-head-loss solve."""

    diameter: float = 0.0  # in
    iterations: int = 0
    converged: bool = False
    relative_error: float = 0.0  # of the last checked iterate


def solve_equivalent_diameter(
    flow: float,
    head_loss: float,
    density: float,
    viscosity: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_SOLVER_TOLERANCE,
    roughness: float = DEFAULT_RELATIVE_ROUGHNESS,
) -> DiameterSolution:
    """Find the equivalent diameter producing *head_loss* at *flow*.

    Seeds with :func:`standard_air_diameter`, then corrects with the
    actual fluid properties: each iteration predicts the head loss at the
    current diameter and scales it by ``(calc/target)^0.2``.  Stops once
    the relative error is below *tolerance* or after *max_iterations*;
    the last iterate is returned either way.

    Args:
        flow: Flow rate [ft³/min].
        head_loss: Target head loss [in WC/100 ft].
        density: Fluid density [lb/ft³].
        viscosity: Fluid viscosity [lb/(ft·h)].
        max_iterations: Iteration cap.
        tolerance: Relative error accepted as converged.
        roughness: Relative roughness for the friction factor.

    Returns:
        DiameterSolution; ``diameter`` is 0 for invalid inputs.
    """
    if flow <= 0 or head_loss <= 0 or density <= 0 or viscosity <= 0:
        return DiameterSolution()

    de = standard_air_diameter(flow, head_loss)
    solution = DiameterSolution(diameter=de)

    for i in range(max_iterations):
        area = flow_area(de)
        velocity = velocity_from_flow(flow, area)
        re = reynolds_number(density, velocity, de, viscosity)
        f = friction_factor(re, roughness)
        calc = head_loss_darcy_weisbach(f, de, velocity, density)

        error = (calc - head_loss) / head_loss
        solution.iterations = i + 1
        solution.relative_error = abs(error)
        if abs(error) < tolerance:
            solution.converged = True
            break

        de *= (calc / head_loss) ** SOLVER_DAMPING_EXP

    solution.diameter = de
    return solution


def equivalent_diameter_from_head_loss(
    flow: float,
    head_loss: float,
    density: float,
    viscosity: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """Equivalent diameter [in] from head loss; see :func:`solve_equivalent_diameter`."""
    return solve_equivalent_diameter(
        flow, head_loss, density, viscosity, max_iterations=max_iterations
    ).diameter
