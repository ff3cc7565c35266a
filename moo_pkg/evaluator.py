"""Tree-walking evaluator.

Arithmetic follows IEEE-754 doubles: division by zero yields ``inf`` or
``nan`` and ``^`` on a negative base with a fractional exponent yields
``nan``. Plain Python floats raise in those cases, so operators are applied
through NumPy ufuncs with floating point warnings silenced.
"""

from __future__ import annotations

import numpy as np

from .expression import BinaryOp, Call, Expression, Grouping, Literal, Variable

BINARY_OPERATORS = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    "^": np.power,
}


def _walk(node: Expression, x: np.float64, y: np.float64) -> np.float64:
    if isinstance(node, Literal):
        return np.float64(node.value)
    if isinstance(node, Variable):
        if node.name == "x":
            return x
        if node.name == "y":
            return y
        return np.float64(0.0)
    if isinstance(node, Grouping):
        return _walk(node.inner, x, y)
    if isinstance(node, Call):
        return np.float64(node.function(float(_walk(node.argument, x, y))))
    if isinstance(node, BinaryOp):
        op = BINARY_OPERATORS[node.operator]
        return op(_walk(node.left, x, y), _walk(node.right, x, y))
    raise TypeError(f"not an expression node: {node!r}")


def evaluate(node: Expression, x: float, y: float = 0.0) -> float:
    """Evaluate ``node`` with the given bindings for ``x`` and ``y``."""
    with np.errstate(all="ignore"):
        return float(_walk(node, np.float64(x), np.float64(y)))
