"""Tests for the RK4 integrator."""

import math

import numpy as np
import pytest

from moo_pkg.config import MAX_TRAJECTORY_STEPS
from moo_pkg.integrator import integrate, runge_kutta_step
from moo_pkg.parser import parse
from moo_pkg.types import IntegrationError


class TestRungeKuttaStep:
    def test_exponential_growth(self):
        """dy/dx = y from (0, 1): one step approximates e^h."""
        y_next, x_next = parse("y").runge_kutta_step(0.0, 1.0, 0.1)
        assert x_next == pytest.approx(0.1)
        assert abs(y_next - math.exp(0.1)) < 1e-6

    def test_classical_k4_is_exact_for_linear_in_x(self):
        # y' = x from (0, 0): exact y(1) = 0.5
        y_next, _ = parse("x").runge_kutta_step(0.0, 0.0, 1.0)
        assert y_next == pytest.approx(0.5)

    def test_exact_for_quadratic_in_x(self):
        # y' = 3x^2 from (0, 0): exact y(2) = 8
        y_next, x_next = parse("3 * x ^ 2").runge_kutta_step(0.0, 0.0, 2.0)
        assert y_next == pytest.approx(8.0)
        assert x_next == 2.0

    def test_stateless(self):
        program = parse("x + y")
        first = program.runge_kutta_step(0.5, 1.0, 0.2)
        program.runge_kutta_step(3.0, -1.0, 0.7)
        assert program.runge_kutta_step(0.5, 1.0, 0.2) == first

    def test_negative_step(self):
        y_back, x_back = parse("y").runge_kutta_step(0.0, 1.0, -0.1)
        assert x_back == pytest.approx(-0.1)
        assert y_back == pytest.approx(math.exp(-0.1), abs=1e-6)

    def test_accepts_any_derivative(self):
        class Constant:
            def evaluate(self, x, y=0.0):
                return 2.0

        assert runge_kutta_step(Constant(), 0.0, 1.0, 0.5) == (2.0, 0.5)


class TestIntegrate:
    def test_trajectory_reaches_e(self):
        xs, ys = integrate(parse("y"), 0.0, 1.0, 0.1, 10)
        assert len(xs) == len(ys) == 11
        assert np.allclose(xs, np.linspace(0.0, 1.0, 11))
        assert ys[-1] == pytest.approx(math.e, abs=1e-5)

    def test_program_integrate_matches_repeated_steps(self):
        program = parse("sin(x) - y")
        xs, ys = program.integrate(0.0, 0.0, 0.25, 4)
        x, y = 0.0, 0.0
        for i in range(1, 5):
            y, x = program.runge_kutta_step(x, y, 0.25)
            assert xs[i] == pytest.approx(x)
            assert ys[i] == pytest.approx(y)

    def test_zero_steps(self):
        xs, ys = integrate(parse("y"), 1.0, 2.0, 0.1, 0)
        assert xs.tolist() == [1.0]
        assert ys.tolist() == [2.0]

    @pytest.mark.parametrize("steps", [-1, 1.5, True, MAX_TRAJECTORY_STEPS + 1])
    def test_invalid_steps(self, steps):
        with pytest.raises(IntegrationError) as exc_info:
            integrate(parse("y"), 0.0, 1.0, 0.1, steps)
        assert exc_info.value.code == "INVALID_STEPS"

    @pytest.mark.parametrize("h", [math.inf, math.nan])
    def test_invalid_step_size(self, h):
        with pytest.raises(IntegrationError) as exc_info:
            integrate(parse("y"), 0.0, 1.0, h, 3)
        assert exc_info.value.code == "INVALID_STEP_SIZE"
