"""Export of parsed programs to SymPy expressions.

The export preserves the parsed structure (``evaluate=False``), so the
right-grouped chains chosen by the parser stay visible in the result. Calls
become the matching SymPy function only while they still use the built-in
callable; anything else becomes an undefined SymPy function.
"""

from __future__ import annotations

import sympy as sp

from .config import BUILTIN_FUNCTIONS
from .expression import BinaryOp, Call, Expression, Grouping, Literal, Variable
from .program import Program

SYMPY_FUNCTIONS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "abs": sp.Abs,
    "sqrt": sp.sqrt,
    "exp": sp.exp,
    "ln": sp.log,
}

x, y = sp.symbols("x y")


def _literal(value: float) -> sp.Expr:
    if value.is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def _function(node: Call):
    # a registry may rebind a built-in name to something else
    if node.name in SYMPY_FUNCTIONS and node.function is BUILTIN_FUNCTIONS.get(node.name):
        return SYMPY_FUNCTIONS[node.name]
    return sp.Function(node.name)


def _convert(node: Expression) -> sp.Expr:
    if isinstance(node, Literal):
        return _literal(node.value)
    if isinstance(node, Variable):
        return x if node.name == "x" else y
    if isinstance(node, Grouping):
        return _convert(node.inner)
    if isinstance(node, Call):
        return _function(node)(_convert(node.argument), evaluate=False)

    left = _convert(node.left)
    right = _convert(node.right)
    if node.operator == "+":
        return sp.Add(left, right, evaluate=False)
    if node.operator == "-":
        return sp.Add(left, sp.Mul(-1, right, evaluate=False), evaluate=False)
    if node.operator == "*":
        return sp.Mul(left, right, evaluate=False)
    if node.operator == "/":
        return sp.Mul(left, sp.Pow(right, -1, evaluate=False), evaluate=False)
    return sp.Pow(left, right, evaluate=False)


def to_sympy(program: Program | Expression) -> sp.Expr:
    """Convert a program (or a bare tree) to an unevaluated SymPy expression."""
    body = program.body if isinstance(program, Program) else program
    return _convert(body)
