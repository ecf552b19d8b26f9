#!/usr/bin/env python3
"""
clcs - Command-Line Calculator

Main entry point for the prefix-notation calculator. This file is a thin
wrapper that delegates all functionality to the clcs_pkg package.

Usage:
    python clcs.py                      # Interactive REPL
    python clcs.py -e "+ 2 2"           # Evaluate expression
    python clcs.py --help               # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for clcs.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from clcs_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
