"""Public API for Moo - returns structured objects without side effects."""

from __future__ import annotations

from functools import lru_cache
from typing import Mapping

from .config import CACHE_SIZE_PARSE, DEFAULT_STEP, DEFAULT_STEPS
from .expression import UnaryFunction
from .functions import FunctionRegistry
from .logging_config import get_logger
from .parser import Parser
from .program import Program
from .types import (
    EvalResult,
    IntegrationError,
    ParseError,
    TrajectoryResult,
    ValidationError,
)

logger = get_logger("api")

_DEFAULT_PARSER = Parser()


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def _parse_default(expression: str) -> Program | None:
    return _DEFAULT_PARSER.parse(expression)


def compile_expression(
    expression: str, functions: Mapping[str, UnaryFunction] | None = None
) -> Program:
    """Parse an expression, raising on failure.

    Args:
        expression: Expression string (e.g., "10 + x", "sin(x) * y")
        functions: Extra unary functions available to the expression

    Returns:
        Parsed Program

    Raises:
        ParseError: the expression is malformed or empty
        ValidationError: ``functions`` holds an invalid name or a non-callable
    """
    if functions:
        try:
            registry = FunctionRegistry(functions)
        except (ValueError, TypeError) as e:
            raise ValidationError(str(e), "INVALID_FUNCTION") from e
        program = Parser(registry).parse(expression)
    else:
        program = _parse_default(expression)
    if program is None:
        raise ParseError("Expression is empty", "EMPTY_EXPRESSION")
    return program


def _failure(error: ParseError) -> EvalResult:
    return EvalResult(ok=False, error=str(error), error_code=error.code, span=error.span)


def evaluate(
    expression: str,
    x: float = 0.0,
    y: float = 0.0,
    functions: Mapping[str, UnaryFunction] | None = None,
) -> EvalResult:
    """Evaluate an expression at the given bindings.

    Example:
        >>> from moo_pkg.api import evaluate
        >>> evaluate("10 + x", x=5).value
        15.0
        >>> evaluate("unknown_fn(x)").error_code
        'UNKNOWN_FUNCTION'
    """
    try:
        program = compile_expression(expression, functions)
        return EvalResult(ok=True, value=program.evaluate(x, y))
    except ParseError as e:
        return _failure(e)
    except (ValueError, TypeError, ArithmeticError) as e:
        # raised by a caller-supplied function
        logger.warning("Evaluation of %r failed: %s", expression, e, exc_info=True)
        return EvalResult(ok=False, error=f"Evaluation error: {e}", error_code="EVALUATION_ERROR")


def runge_kutta(
    expression: str,
    x0: float = 0.0,
    y0: float = 0.0,
    h: float = DEFAULT_STEP,
    steps: int = DEFAULT_STEPS,
    functions: Mapping[str, UnaryFunction] | None = None,
) -> TrajectoryResult:
    """Integrate dy/dx = expression with fixed-step RK4.

    Example:
        >>> from moo_pkg.api import runge_kutta
        >>> result = runge_kutta("y", x0=0, y0=1, h=0.1, steps=1)
        >>> round(result.ys[-1], 6)
        1.105171
    """
    try:
        program = compile_expression(expression, functions)
        xs, ys = program.integrate(x0, y0, h, steps)
    except ParseError as e:
        return TrajectoryResult(ok=False, error=str(e), error_code=e.code)
    except IntegrationError as e:
        return TrajectoryResult(ok=False, error=str(e), error_code=e.code)
    except (ValueError, TypeError, ArithmeticError) as e:
        logger.warning("Integration of %r failed: %s", expression, e, exc_info=True)
        return TrajectoryResult(
            ok=False, error=f"Evaluation error: {e}", error_code="EVALUATION_ERROR"
        )
    return TrajectoryResult(ok=True, xs=xs.tolist(), ys=ys.tolist())


def validate_expression(
    expression: str, functions: Mapping[str, UnaryFunction] | None = None
) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        compile_expression(expression, functions)
        return True, None
    except ParseError as e:
        return False, str(e)


def symbolic(
    expression: str, functions: Mapping[str, UnaryFunction] | None = None
) -> EvalResult:
    """Describe an expression as an unevaluated SymPy expression string.

    Example:
        >>> from moo_pkg.api import symbolic
        >>> symbolic("2 ^ x").result
        '2**x'
    """
    from .symbolic import to_sympy

    try:
        program = compile_expression(expression, functions)
    except ParseError as e:
        return _failure(e)
    return EvalResult(ok=True, result=str(to_sympy(program)))


def plot_trajectory(
    expression: str,
    x0: float = 0.0,
    y0: float = 0.0,
    h: float = DEFAULT_STEP,
    steps: int = DEFAULT_STEPS,
    output: str | None = None,
    ascii: bool = False,
    functions: Mapping[str, UnaryFunction] | None = None,
) -> EvalResult:
    """Integrate an expression and plot the trajectory.

    Args:
        output: PNG path for the Matplotlib plot (a temporary file if None)
        ascii: Return an ASCII plot instead of writing an image
    """
    from .plotting import render_trajectory

    trajectory = runge_kutta(expression, x0, y0, h, steps, functions)
    if not trajectory.ok:
        return EvalResult(ok=False, error=trajectory.error, error_code=trajectory.error_code)
    return render_trajectory(
        trajectory.xs, trajectory.ys, title=f"dy/dx = {expression}", output=output, ascii=ascii
    )
