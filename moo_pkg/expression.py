"""Expression tree node types.

Every node is a frozen dataclass that exclusively owns its children. Trees are
built once by the parser and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal as TypingLiteral, Union

Operator = TypingLiteral["+", "-", "*", "/", "^"]
UnaryFunction = Callable[[float], float]


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Grouping:
    inner: Expression


@dataclass(frozen=True)
class Call:
    """A registered unary function applied to an argument.

    The callable is resolved when the tree is parsed, so evaluation never
    consults the function registry.
    """

    name: str
    argument: Expression
    function: UnaryFunction = field(compare=False, repr=False)


@dataclass(frozen=True)
class BinaryOp:
    left: Expression
    operator: Operator
    right: Expression


Expression = Union[Literal, Variable, Grouping, Call, BinaryOp]


def to_text(node: Expression) -> str:
    """Render a tree back to source form with every binary operation grouped.

    ``10 - 5 - 2`` renders as ``(10 - (5 - 2))``, which makes the grouping
    chosen by the parser visible.
    """
    if isinstance(node, Literal):
        return f"{node.value:g}"
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, Grouping):
        return to_text(node.inner)
    if isinstance(node, Call):
        return f"{node.name}({to_text(node.argument)})"
    return f"({to_text(node.left)} {node.operator} {to_text(node.right)})"


def depth(node: Expression) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    if isinstance(node, Grouping):
        return 1 + depth(node.inner)
    if isinstance(node, Call):
        return 1 + depth(node.argument)
    if isinstance(node, BinaryOp):
        return 1 + max(depth(node.left), depth(node.right))
    return 1
