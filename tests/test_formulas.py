"""Tests for duct sizing formulas."""

import math

import pytest

from ductcalc.core.formulas import (
    DiameterSolution,
    duct_side_from_flow,
    duct_size_x_from_de,
    duct_size_y_from_de,
    equivalent_diameter,
    equivalent_diameter_from_head_loss,
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


class TestGeometry:
    def test_equivalent_diameter_square(self):
        assert equivalent_diameter(10, 10) == pytest.approx(10.93, rel=1e-3)

    def test_equivalent_diameter_symmetric(self):
        assert equivalent_diameter(8, 20) == pytest.approx(equivalent_diameter(20, 8))

    @pytest.mark.parametrize("x, y", [(0, 10), (10, 0), (-1, 5)])
    def test_equivalent_diameter_invalid(self, x, y):
        assert equivalent_diameter(x, y) == 0.0

    def test_flow_area(self):
        assert flow_area(12.0) == pytest.approx(math.pi / 4)
        assert flow_area(equivalent_diameter(10, 10)) == pytest.approx(0.6518, abs=1e-4)
        assert flow_area(0.0) == 0.0

    def test_side_from_de_is_area_match(self):
        assert duct_size_y_from_de(12.0, 10.0) == pytest.approx(math.pi * 36 / 10)
        assert duct_size_x_from_de(12.0, 10.0) == pytest.approx(math.pi * 36 / 10)
        assert duct_size_y_from_de(12.0, 0.0) == 0.0

    def test_side_from_de_not_inverse(self):
        de = equivalent_diameter(10, 10)
        assert duct_size_y_from_de(de, 10) != pytest.approx(10.0, rel=1e-3)

    def test_side_from_flow(self):
        assert duct_side_from_flow(1000.0, 1000.0, 12.0) == pytest.approx(12.0)
        assert duct_side_from_flow(1000.0, 0.0, 12.0) == 0.0


class TestFlow:
    def test_velocity_from_flow(self):
        assert velocity_from_flow(500.0, 0.5) == pytest.approx(1000.0)
        assert velocity_from_flow(500.0, 0.0) == 0.0

    def test_flow_from_velocity(self):
        assert flow_from_velocity(1000.0, 0.5) == pytest.approx(500.0)
        assert flow_from_velocity(1000.0, 0.0) == 0.0

    def test_reynolds(self):
        re = reynolds_number(0.075, 1000.0, 12.0, 0.0473)
        assert re == pytest.approx(0.075 * 1000 * 60 * 1.0 / 0.0473)

    def test_reynolds_invalid(self):
        assert reynolds_number(0.075, 1000.0, 12.0, 0.0) == 0.0
        assert reynolds_number(0.075, 1000.0, 0.0, 0.0473) == 0.0

    def test_velocity_pressure(self):
        assert velocity_pressure(4005.0, 0.075) == pytest.approx(1.0)
        assert velocity_pressure(4005.0, 0.15) == pytest.approx(2.0)
        assert velocity_pressure(0.0, 0.075) == 0.0


class TestFrictionFactor:
    def test_non_positive(self):
        assert friction_factor(0.0) == 0.0
        assert friction_factor(-5.0) == 0.0

    def test_laminar(self):
        assert friction_factor(1000.0) == pytest.approx(0.064)
        assert friction_factor(2299.0) == pytest.approx(64 / 2299)

    def test_boundary_is_turbulent(self):
        expected = 0.25 / math.log10(0.0005 / 3.7 + 5.74 / 2300**0.9) ** 2
        assert friction_factor(2300.0) == pytest.approx(expected)

    def test_discontinuity_at_boundary(self):
        assert friction_factor(2300.0) > friction_factor(2299.0) * 1.5

    def test_roughness_raises_friction(self):
        assert friction_factor(1e5, 0.001) > friction_factor(1e5, 0.0005)

    def test_head_loss(self):
        assert head_loss_darcy_weisbach(0.02, 12.0, 1000.0, 0.075) == pytest.approx(
            0.02 * 100 * 0.075 * 1000.0**2 / 2194
        )

    def test_head_loss_invalid(self):
        assert head_loss_darcy_weisbach(0.02, 0.0, 1000.0, 0.075) == 0.0
        assert head_loss_darcy_weisbach(0.02, 12.0, 0.0, 0.075) == 0.0


class TestDiameterSolver:
    def test_standard_air_diameter(self):
        expected = (0.109136 * 500**1.9 / 0.08) ** (1 / 5.02)
        assert standard_air_diameter(500.0, 0.08) == pytest.approx(expected)
        assert standard_air_diameter(0.0, 0.08) == 0.0
        assert standard_air_diameter(500.0, 0.0) == 0.0

    @pytest.mark.parametrize(
        "flow, head_loss, density, viscosity",
        [(0.0, 0.08, 0.075, 0.0473), (500.0, 0.0, 0.075, 0.0473),
         (500.0, 0.08, 0.0, 0.0473), (500.0, 0.08, 0.075, 0.0)],
    )
    def test_invalid_inputs(self, flow, head_loss, density, viscosity):
        solution = solve_equivalent_diameter(flow, head_loss, density, viscosity)
        assert solution == DiameterSolution()

    @pytest.mark.parametrize("max_iterations", [1, 3, 5, 20])
    def test_terminates_within_cap(self, max_iterations):
        solution = solve_equivalent_diameter(
            500.0, 0.08, 0.075, 0.0473, max_iterations=max_iterations
        )
        assert 1 <= solution.iterations <= max_iterations
        assert solution.diameter > 0

    def test_seed_within_tolerance_returns_on_first_check(self):
        flow, head_loss, density = 10.0, 0.08, 1e-5
        seed = standard_air_diameter(flow, head_loss)
        velocity = velocity_from_flow(flow, flow_area(seed))
        d_ft = seed / 12
        # Laminar viscosity that makes the seed reproduce the head loss exactly
        viscosity = head_loss * 60 * d_ft**2 * 2194 / (6400 * velocity)

        solution = solve_equivalent_diameter(flow, head_loss, density, viscosity)
        assert solution.iterations == 1
        assert solution.converged
        assert solution.diameter == pytest.approx(seed)

    def test_non_convergence_returns_last_iterate(self):
        solution = solve_equivalent_diameter(500.0, 0.08, 0.075, 0.0473, max_iterations=1)
        assert solution.iterations == 1
        assert not solution.converged
        assert solution.relative_error > 0.001
        assert solution.diameter != pytest.approx(standard_air_diameter(500.0, 0.08))

    def test_converged_diameter_reproduces_head_loss(self):
        solution = solve_equivalent_diameter(
            500.0, 0.08, 0.075, 0.0473, max_iterations=50
        )
        assert solution.converged
        de = solution.diameter
        v = velocity_from_flow(500.0, flow_area(de))
        f = friction_factor(reynolds_number(0.075, v, de, 0.0473))
        assert head_loss_darcy_weisbach(f, de, v, 0.075) == pytest.approx(0.08, rel=5e-3)

    def test_scalar_wrapper(self):
        expected = solve_equivalent_diameter(500.0, 0.08, 0.075, 0.0473).diameter
        assert equivalent_diameter_from_head_loss(500.0, 0.08, 0.075, 0.0473) == expected
