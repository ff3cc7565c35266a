"""Optional plotting of integrated trajectories."""

from __future__ import annotations

import math
import tempfile
from typing import Sequence

import numpy as np

try:
    # Set non-GUI backend before importing pyplot to avoid Tkinter issues
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from .logging_config import get_logger
from .types import EvalResult

logger = get_logger("plotting")

# ASCII plot dimensions in characters
ASCII_ROWS = 20
ASCII_COLS = 60


def ascii_plot(xs: Sequence[float], ys: Sequence[float]) -> str | None:
    """Render points on a character grid, or None if no point is finite."""
    points = [
        (x, y) for x, y in zip(xs, ys) if math.isfinite(x) and math.isfinite(y)
    ]
    if not points:
        return None

    x_min = min(p[0] for p in points)
    x_max = max(p[0] for p in points)
    y_min = min(p[1] for p in points)
    y_max = max(p[1] for p in points)
    x_range = x_max - x_min if x_max != x_min else 1.0
    y_range = y_max - y_min if y_max != y_min else 1.0

    grid = [[" " for _ in range(ASCII_COLS)] for _ in range(ASCII_ROWS)]

    if y_min <= 0 <= y_max:
        axis_row = int((y_max - 0) / y_range * (ASCII_ROWS - 1))
        grid[axis_row] = ["-" for _ in range(ASCII_COLS)]
    if x_min <= 0 <= x_max:
        axis_col = int((0 - x_min) / x_range * (ASCII_COLS - 1))
        for row in grid:
            row[axis_col] = "+" if row[axis_col] == "-" else "|"

    for x, y in points:
        col = int((x - x_min) / x_range * (ASCII_COLS - 1))
        row = int((y_max - y) / y_range * (ASCII_ROWS - 1))
        grid[row][col] = "*"

    return "\n".join("".join(row) for row in grid)


def render_trajectory(
    xs: Sequence[float],
    ys: Sequence[float],
    title: str = "trajectory",
    output: str | None = None,
    ascii: bool = False,
) -> EvalResult:
    """Plot ``(xs, ys)`` to a PNG file or as ASCII text.

    Returns:
        EvalResult whose ``result`` is the ASCII plot or the path written
    """
    if ascii:
        text = ascii_plot(xs, ys)
        if text is None:
            return EvalResult(
                ok=False, error="Cannot plot: no finite points", error_code="PLOT_ERROR"
            )
        return EvalResult(ok=True, result=text)

    if not HAS_MATPLOTLIB:
        return EvalResult(
            ok=False,
            error="matplotlib not installed. Use ascii=True for ASCII plot.",
            error_code="PLOT_ERROR",
        )

    if output is None:
        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as handle:
            output = handle.name

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        ax.plot(np.asarray(xs), np.asarray(ys), linewidth=2, color="#2E86AB", marker="o", markersize=3)
        ax.set_xlabel("x", fontsize=12, fontweight="bold")
        ax.set_ylabel("y", fontsize=12, fontweight="bold")
        ax.set_title(title, fontsize=14, fontweight="bold")
        ax.grid(True, alpha=0.3, linestyle="--")
        fig.tight_layout()
        fig.savefig(output, dpi=150, bbox_inches="tight")
    except (OSError, ValueError) as e:
        logger.error("Failed to save plot to %s: %s", output, e, exc_info=True)
        return EvalResult(ok=False, error=f"Failed to save plot: {e}", error_code="PLOT_ERROR")
    finally:
        plt.close(fig)
    logger.info("Plot saved to %s", output)
    return EvalResult(ok=True, result=output)
