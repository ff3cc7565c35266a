"""Exceptions and result dataclasses for consistent API responses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

Span = tuple[int, int]


def _json_float(value: float) -> float | str:
    """Spell non-finite floats as "inf", "-inf" or "nan" so the output is strict JSON."""
    if math.isfinite(value):
        return value
    return str(float(value))


class ParseError(Exception):
    """Raised when a source text cannot be turned into a program."""

    default_code = "PARSE_ERROR"

    def __init__(
        self, message: str, code: str | None = None, span: Span | None = None
    ):
        self.message = message
        self.code = code or self.default_code
        self.span = span
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.span is None:
            return self.message
        return f"{self.message} (at {self.span[0]}..{self.span[1]})"


class LexError(ParseError):
    """Raised for a malformed numeric literal."""

    default_code = "LEX_ERROR"


class ExpressionSyntaxError(ParseError):
    """Raised for an unexpected or missing token."""

    default_code = "SYNTAX_ERROR"


class SemanticError(ParseError):
    """Raised for a name that is neither a variable nor a registered function."""

    default_code = "SEMANTIC_ERROR"


class ValidationError(ParseError):
    """Raised when input exceeds the size limits or a function table is invalid."""

    default_code = "VALIDATION_ERROR"


class IntegrationError(ValueError):
    """Raised for invalid integration parameters."""

    def __init__(self, message: str, code: str = "INTEGRATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass
class EvalResult:
    """Result of evaluating (or describing) an expression."""

    ok: bool
    value: float | None = None
    result: str | None = None
    error: str | None = None
    error_code: str | None = None
    span: Span | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = _json_float(self.value)
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.span is not None:
            result_dict["span"] = list(self.span)
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class TrajectoryResult:
    """Result of integrating an expression as dy/dx = f(x, y)."""

    ok: bool
    xs: list[float] | None = None
    ys: list[float] | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def final(self) -> tuple[float, float] | None:
        """Last (x, y) pair of the trajectory."""
        if not self.xs or not self.ys:
            return None
        return self.xs[-1], self.ys[-1]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.xs is not None and self.ys is not None:
            result_dict["points"] = [
                [_json_float(x), _json_float(y)] for x, y in zip(self.xs, self.ys)
            ]
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"TrajectoryResult(ok=False, error={self.error!r})"
        return f"TrajectoryResult(ok=True, steps={len(self.xs or []) - 1}, final={self.final!r})"
