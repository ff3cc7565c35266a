#!/usr/bin/env python3
"""
Moo - expression evaluator and RK4 integrator

Main entry point for the Moo command line. This file serves as a thin
wrapper that delegates all functionality to the moo_pkg package.

Usage:
    python moo.py                           # Read expressions from stdin
    python moo.py -e "10 + x" -x 5          # Evaluate expression
    python moo.py -e "y" --rk4 --y0 1       # Integrate dy/dx = y
    python moo.py --help                    # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Moo.

    Delegates all functionality to the moo_pkg.cli module,
    which handles argument parsing, evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from moo_pkg.cli import main_entry

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
