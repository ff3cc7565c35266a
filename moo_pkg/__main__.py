"""``python -m moo_pkg``: the same command line as the ``moo`` script.

    python -m moo_pkg -e "10 + x" -x 5
    python -m moo_pkg -e "y" --rk4 --y0 1 --steps 10 --format json
    echo "sin(x) * 2" | python -m moo_pkg -x 0.5
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
