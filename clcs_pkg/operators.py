"""Operator registry.

The calculator knows a fixed, closed set of operators. Each one is a member
of :class:`Operator` and is applied through :func:`apply_operator`, which
left-folds the operands starting from the first one.

Division, integer division and modulo by zero yield 0 for that fold step.
Results that overflow are returned as ``inf`` and results without a real
value as ``nan``; deciding whether those are errors is up to the evaluator.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Sequence

import numpy as np

from .types import NotationError


class Operator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    INT_DIVIDE = "\\"
    MODULO = "%"
    RANDOM = "r"

    @classmethod
    def lookup(cls, symbol: str) -> "Operator | None":
        """Return the operator for ``symbol`` or None if it is not one."""
        try:
            return cls(symbol)
        except ValueError:
            return None


OPERATOR_SYMBOLS = frozenset(op.value for op in Operator)


class NumpyRandomSource:
    """Default random source backed by a NumPy Generator.

    Any object with an ``integers(low, high)`` method drawing from the
    inclusive range can stand in for it, e.g. a fixed source in tests.
    """

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def integers(self, low: int, high: int) -> int:
        return int(self._rng.integers(low, high, endpoint=True))


def _power(base: float, exponent: float) -> float:
    try:
        result = base**exponent
    except OverflowError:
        return math.inf
    except ZeroDivisionError:
        # 0 raised to a negative power
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return float(result)


def random_in_range(
    source: Any, a: float, b: float | None = None
) -> float:
    """Random integer in the inclusive range between ``a`` and ``b``.

    With only ``a`` the range is ``[1, a]``. Bounds are truncated to
    integers first and may come in either order; equal bounds return
    that value without drawing.
    """
    if b is None:
        a, b = 1, a
    if math.isnan(a) or math.isnan(b):
        return math.nan
    low, high = sorted((math.trunc(a), math.trunc(b)))
    if low == high:
        return float(low)
    try:
        return float(source.integers(low, high))
    except (ValueError, OverflowError) as e:
        raise NotationError(
            f"Random range out of bounds ({low}, {high})!", "NOTATION_ERROR"
        ) from e


def apply_operator(
    op: Operator, operands: Sequence[float], source: Any
) -> float:
    """Fold ``operands`` with ``op`` from left to right.

    Args:
        op: Operator to apply
        operands: One or more numbers; the first one seeds the fold
        source: Random source used by ``r``

    Returns:
        The reduced value (may be inf or nan)
    """
    if not operands:
        raise ValueError("apply_operator needs at least one operand")
    first, rest = operands[0], operands[1:]
    if op is Operator.RANDOM and not rest:
        return random_in_range(source, first)

    acc = float(first)
    for value in rest:
        if op is Operator.ADD:
            acc = acc + value
        elif op is Operator.SUBTRACT:
            acc = acc - value
        elif op is Operator.MULTIPLY:
            acc = acc * value
        elif op is Operator.DIVIDE:
            acc = acc / value if value != 0 else 0.0
        elif op is Operator.POWER:
            acc = _power(acc, value)
        elif op is Operator.INT_DIVIDE:
            acc = _truncating_divide(acc, value) if value != 0 else 0.0
        elif op is Operator.MODULO:
            # Sign follows the dividend
            acc = math.fmod(acc, value) if value != 0 else 0.0
        elif op is Operator.RANDOM:
            acc = random_in_range(source, acc, value)
    return acc


def _truncating_divide(a: float, b: float) -> float:
    quotient = a / b
    if math.isinf(quotient) or math.isnan(quotient):
        return quotient
    return float(math.trunc(quotient))
