"""Centralized configuration for Moo.

This module defines:
- Input validation limits (length, nesting depth, operator chain length)
- Cache sizes for parsed programs
- Integration defaults (step size, step count, trajectory limit)
- The built-in function table

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with MOO_)
"""

import os

import numpy as np

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("moo-math")
except importlib.metadata.PackageNotFoundError:
    # Fallback if package not installed
    VERSION = "0.1.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("MOO_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("MOO_MAX_EXPRESSION_DEPTH", "100")
)  # nested parentheses and calls
MAX_CHAIN_LENGTH = int(
    os.getenv("MOO_MAX_CHAIN_LENGTH", "200")
)  # operators in enclosing same-precedence chains

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("MOO_CACHE_SIZE_PARSE", "1024"))

# Output configuration
OUTPUT_PRECISION = int(os.getenv("MOO_OUTPUT_PRECISION", "12"))

# Integration configuration
DEFAULT_STEP = float(os.getenv("MOO_DEFAULT_STEP", "0.1"))
DEFAULT_STEPS = int(os.getenv("MOO_DEFAULT_STEPS", "10"))
MAX_TRAJECTORY_STEPS = int(os.getenv("MOO_MAX_TRAJECTORY_STEPS", "100000"))

# Variables a bare identifier may name
VARIABLES = ("x", "y")

# NumPy ufuncs keep IEEE semantics: sqrt(-1) is nan instead of raising
BUILTIN_FUNCTIONS = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "abs": np.abs,
    "sqrt": np.sqrt,
    "exp": np.exp,
    "ln": np.log,
}
