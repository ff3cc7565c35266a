"""Moo package: lexer, parser, evaluator and RK4 integrator for expressions in x and y."""

from .functions import FunctionRegistry
from .parser import Parser, parse
from .program import Program
from .types import (
    ExpressionSyntaxError,
    LexError,
    ParseError,
    SemanticError,
    ValidationError,
)

__all__ = [
    "config",
    "lexer",
    "cursor",
    "parser",
    "expression",
    "evaluator",
    "integrator",
    "functions",
    "symbolic",
    "plotting",
    "cli",
    "types",
    "api",
    "logging_config",
    "FunctionRegistry",
    "Parser",
    "Program",
    "parse",
    "ParseError",
    "LexError",
    "ExpressionSyntaxError",
    "SemanticError",
    "ValidationError",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "runge_kutta",
    "validate_expression",
    "symbolic",
    "plot_trajectory",
]
