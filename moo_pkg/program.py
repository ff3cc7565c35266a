"""Parsed program: an immutable expression tree ready for evaluation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .evaluator import evaluate
from .expression import Expression, to_text
from .integrator import integrate, runge_kutta_step


@dataclass(frozen=True)
class Program:
    """Root of a parsed expression.

    A program can be evaluated any number of times with different bindings;
    evaluation never mutates the tree.
    """

    body: Expression
    source: str = ""

    def evaluate(self, x: float, y: float = 0.0) -> float:
        return evaluate(self.body, x, y)

    def runge_kutta_step(self, x0: float, y0: float, h: float) -> tuple[float, float]:
        """One RK4 step treating this program as dy/dx = f(x, y).

        Returns:
            ``(y_next, x_next)``
        """
        return runge_kutta_step(self, x0, y0, h)

    def integrate(
        self, x0: float, y0: float, h: float, steps: int
    ) -> tuple[np.ndarray, np.ndarray]:
        return integrate(self, x0, y0, h, steps)

    def __str__(self) -> str:
        return to_text(self.body)
