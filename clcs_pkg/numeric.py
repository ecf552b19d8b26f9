"""Rounding policy and number handling.

This module handles:
- Precision clamping (negative requests become 0)
- Rounding to a number of decimal digits, ties away from zero
- Strict parsing of numeric literal tokens
- Formatting numbers for step traces and display
"""

from __future__ import annotations

import math
import re

from .config import DEFAULT_PRECISION

# Optional sign, digits with an optional fraction (or a bare fraction), optional exponent
NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# Every double at or above 2**52 is a whole number
_EXACT_INTEGER_LIMIT = 2.0**52


def clamp_precision(digits: float | int | None) -> int:
    """Truncate ``digits`` to an integer and floor it at 0.

    ``None`` selects DEFAULT_PRECISION.
    """
    if digits is None:
        digits = DEFAULT_PRECISION
    return max(0, math.trunc(digits))


def round_to(value: float, digits: float | int = DEFAULT_PRECISION) -> float:
    """Round ``value`` to ``digits`` decimal places, ties away from zero.

    Args:
        value: Finite number to round
        digits: Decimal digits (truncated to int, negative treated as 0)

    Returns:
        Rounded value as float
    """
    try:
        factor = 10.0 ** clamp_precision(digits)
    except OverflowError:
        return float(value)
    scaled = abs(value) * factor
    if math.isinf(scaled) or scaled >= _EXACT_INTEGER_LIMIT:
        # Scaled value has no fractional part left to round away
        return float(value)
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if rounded else 0.0


def parse_number(token: str) -> float | None:
    """Parse a numeric literal token.

    Returns None when the token is not a plain decimal number, so words
    like ``inf`` or ``nan`` and Python's ``1_000`` are rejected.
    """
    if not NUMBER_RE.match(token):
        return None
    value = float(token)
    if math.isinf(value):
        return None
    return value


def format_number(value: float) -> str:
    """Format a number the way results and steps are displayed.

    Integral values print without a fractional part ("6" instead of "6.0").
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
