"""Fixed-step classical Runge-Kutta (RK4) integration of dy/dx = f(x, y)."""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from .config import MAX_TRAJECTORY_STEPS
from .types import IntegrationError


class Derivative(Protocol):
    def evaluate(self, x: float, y: float = 0.0) -> float: ...


def runge_kutta_step(
    program: Derivative, x0: float, y0: float, h: float
) -> tuple[float, float]:
    """Advance one RK4 step of size ``h`` from ``(x0, y0)``.

    Returns:
        ``(y_next, x_next)``
    """
    f = program.evaluate
    k1 = h * f(x0, y0)
    k2 = h * f(x0 + h / 2, y0 + k1 / 2)
    k3 = h * f(x0 + h / 2, y0 + k2 / 2)
    k4 = h * f(x0 + h, y0 + k3)
    return y0 + (k1 + 2 * k2 + 2 * k3 + k4) / 6, x0 + h


def integrate(
    program: Derivative, x0: float, y0: float, h: float, steps: int
) -> tuple[np.ndarray, np.ndarray]:
    """Apply :func:`runge_kutta_step` ``steps`` times.

    Returns:
        ``(xs, ys)`` arrays of length ``steps + 1`` starting at ``(x0, y0)``.
    """
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise IntegrationError(f"steps must be an integer, got {steps!r}", "INVALID_STEPS")
    if steps < 0 or steps > MAX_TRAJECTORY_STEPS:
        raise IntegrationError(
            f"steps must be between 0 and {MAX_TRAJECTORY_STEPS}, got {steps}",
            "INVALID_STEPS",
        )
    if not math.isfinite(h):
        raise IntegrationError(f"step size must be finite, got {h!r}", "INVALID_STEP_SIZE")

    xs = np.empty(steps + 1)
    ys = np.empty(steps + 1)
    xs[0], ys[0] = x0, y0
    x, y = float(x0), float(y0)
    for i in range(1, steps + 1):
        y, x = runge_kutta_step(program, x, y, h)
        xs[i], ys[i] = x, y
    return xs, ys
