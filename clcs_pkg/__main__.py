"""Main entry point for running clcs_pkg as a module.

This allows running clcs with:
    python -m clcs_pkg
    python -m clcs_pkg --health-check
    python -m clcs_pkg -e "+ 2 2"
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
