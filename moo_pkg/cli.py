"""Command-line interface for Moo."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config
from .api import compile_expression, evaluate, plot_trajectory, runge_kutta, symbolic
from .config import VERSION
from .expression import UnaryFunction, depth, to_text
from .functions import FunctionRegistry
from .logging_config import get_logger, setup_logging
from .parser import Parser
from .types import ParseError

logger = get_logger("cli")

REPL_EXIT_COMMANDS = {"quit", "exit"}


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with the given number of significant digits."""
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def print_result(res: dict[str, Any], output_format: str = "human") -> None:
    """Print a result dictionary as JSON or human-readable text."""
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False, allow_nan=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    if "points" in res:
        for x, y in res["points"]:
            print(f"{format_number(x)}\t{format_number(y)}")
        return
    if "value" in res:
        print(format_number(res["value"]))
    if "result" in res:
        print(res["result"])


def build_functions(definitions: list[str]) -> dict[str, UnaryFunction]:
    """Turn ``NAME=EXPR`` definitions into unary functions of ``x``.

    Later definitions may call earlier ones.

    Raises:
        ValueError: a definition is not of the form NAME=EXPR
        ParseError: a body does not parse
    """
    functions: dict[str, UnaryFunction] = {}
    registry = FunctionRegistry()
    for definition in definitions:
        name, sep, body = definition.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid definition {definition!r}, expected NAME=EXPR")
        program = Parser(registry).parse(body)
        if program is None:
            raise ParseError(f"Definition of '{name}' has an empty body", "EMPTY_EXPRESSION")
        functions[name] = lambda v, program=program: program.evaluate(v)
        # rejects names that are not identifiers or that shadow x and y
        registry = registry.with_functions({name: functions[name]})
        logger.debug("Defined %s(x) = %s", name, program)
    return functions


def repl(functions: dict[str, UnaryFunction], x: float, y: float) -> int:
    """Evaluate one expression per input line until EOF or ``exit``."""
    for line in sys.stdin:
        expr = line.strip()
        if not expr:
            continue
        if expr.lower() in REPL_EXIT_COMMANDS:
            break
        print_result(evaluate(expr, x, y, functions=functions).to_dict())
    return 0


def _describe_tree(expression: str, functions: dict[str, UnaryFunction]) -> dict[str, Any]:
    try:
        program = compile_expression(expression, functions)
    except ParseError as e:
        return {"ok": False, "error": str(e), "error_code": e.code}
    return {"ok": True, "result": f"{to_text(program.body)}  [depth {depth(program.body)}]"}


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Moo CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="moo", description="Evaluate and integrate expressions in x and y."
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument("-x", type=float, default=0.0, help="Value bound to x")
    parser.add_argument("-y", type=float, default=0.0, help="Value bound to y")
    parser.add_argument(
        "--define",
        action="append",
        default=[],
        metavar="NAME=EXPR",
        help="Register a unary function whose body is an expression in x",
    )
    parser.add_argument("--tree", action="store_true", help="Print the parsed tree")
    parser.add_argument("--sympy", action="store_true", help="Print the SymPy form")
    parser.add_argument(
        "--rk4", action="store_true", help="Integrate dy/dx = EXPR with fixed-step RK4"
    )
    parser.add_argument("--x0", type=float, default=0.0, help="Initial x for --rk4")
    parser.add_argument("--y0", type=float, default=0.0, help="Initial y for --rk4")
    parser.add_argument(
        "--step", type=float, default=config.DEFAULT_STEP, help="Step size for --rk4"
    )
    parser.add_argument(
        "--steps", type=int, default=config.DEFAULT_STEPS, help="Number of steps for --rk4"
    )
    parser.add_argument("--plot", type=str, metavar="FILE", help="Save a PNG plot of the trajectory")
    parser.add_argument("--ascii", action="store_true", help="Print an ASCII plot of the trajectory")
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    try:
        functions = build_functions(args.define)
    except (ValueError, ParseError) as e:
        print_result({"ok": False, "error": str(e)}, args.format)
        return 1

    if args.eval_expr is None:
        if args.rk4 or args.tree or args.sympy:
            parser.error("an expression is required (-e/--eval)")
        return repl(functions, args.x, args.y)

    expr = args.eval_expr.strip()
    if args.tree:
        res = _describe_tree(expr, functions)
    elif args.sympy:
        res = symbolic(expr, functions).to_dict()
    elif args.rk4 and (args.plot or args.ascii):
        res = plot_trajectory(
            expr,
            args.x0,
            args.y0,
            args.step,
            args.steps,
            output=args.plot,
            ascii=args.ascii,
            functions=functions,
        ).to_dict()
    elif args.rk4:
        res = runge_kutta(expr, args.x0, args.y0, args.step, args.steps, functions).to_dict()
    else:
        res = evaluate(expr, args.x, args.y, functions).to_dict()

    print_result(res, args.format)
    return 0 if res.get("ok") else 1


if __name__ == "__main__":
    sys.exit(main_entry())
