"""Centralized configuration for clcs.

This module defines:
- Precision defaults and bounds for result rounding
- The initial value of the running answer
- Input validation limits (length, nesting depth)
- Random source seeding
- Logging level

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with CLCS_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("clcs")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Rounding precision (decimal digits)
DEFAULT_PRECISION = int(os.getenv("CLCS_DEFAULT_PRECISION", "3"))
MIN_PRECISION = int(os.getenv("CLCS_MIN_PRECISION", "0"))
MAX_PRECISION = int(os.getenv("CLCS_MAX_PRECISION", "9"))

# Value of "ans" at start-up and after a reset
ANS_DEFAULT = float(os.getenv("CLCS_ANS_DEFAULT", "0"))

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("CLCS_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("CLCS_MAX_EXPRESSION_DEPTH", "100")
)  # nested groups + nested operators

# Seed for the "r" operator (unset means nondeterministic)
_seed = os.getenv("CLCS_RANDOM_SEED")
RANDOM_SEED = int(_seed) if _seed else None

LOG_LEVEL = os.getenv("CLCS_LOG_LEVEL", "WARNING")
