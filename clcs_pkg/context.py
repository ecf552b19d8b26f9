"""Evaluation state: the running answer, constants and precision.

An :class:`EvaluationContext` is created by the caller and passed to the
evaluator by reference. It replaces process-wide globals; the public API in
``api.py`` keeps one default context for convenience.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import sympy as sp

from .config import (
    ANS_DEFAULT,
    DEFAULT_PRECISION,
    MAX_PRECISION,
    MIN_PRECISION,
    RANDOM_SEED,
)
from .numeric import round_to
from .operators import NumpyRandomSource

ANS_NAME = "ans"

# Fixed constants; "ans" is resolved live from the context
CONSTANTS: dict[str, float] = {
    "pi": float(sp.pi.evalf()),
    "e": float(sp.E.evalf()),
}
CONSTANT_NAMES = frozenset((*CONSTANTS, ANS_NAME))


class AnswerState:
    """Mutable cell holding the result of the last successful evaluation."""

    def __init__(self, default: float = ANS_DEFAULT):
        self._default = float(default)
        self._value = self._default

    @property
    def value(self) -> float:
        return self._value

    @property
    def default(self) -> float:
        return self._default

    def set(self, value: float, digits: int = DEFAULT_PRECISION) -> float:
        self._value = round_to(value, digits)
        return self._value

    def reset(self) -> None:
        self._value = self._default

    def __repr__(self) -> str:
        return f"AnswerState(value={self._value!r})"


class PrecisionSetting:
    """Session precision, stepped between MIN_PRECISION and MAX_PRECISION."""

    def __init__(
        self,
        default: int = DEFAULT_PRECISION,
        minimum: int = MIN_PRECISION,
        maximum: int = MAX_PRECISION,
    ):
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} exceeds maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum
        self.default = min(max(default, minimum), maximum)
        self._value = self.default

    @property
    def value(self) -> int:
        return self._value

    def set(self, digits: int) -> int:
        self._value = min(max(int(digits), self.minimum), self.maximum)
        return self._value

    def increase(self) -> int:
        if self._value < self.maximum:
            self._value += 1
        return self._value

    def decrease(self) -> int:
        if self._value > self.minimum:
            self._value -= 1
        return self._value

    def reset(self) -> None:
        self._value = self.default


@dataclass
class EvaluationContext:
    """Everything an evaluation reads or writes besides its input."""

    answer: AnswerState = field(default_factory=AnswerState)
    precision: PrecisionSetting = field(default_factory=PrecisionSetting)
    random_source: Any = field(
        default_factory=lambda: NumpyRandomSource(RANDOM_SEED)
    )

    def resolve_constant(self, name: str) -> float | None:
        """Look up a constant by exact name, reading "ans" at call time."""
        if name == ANS_NAME:
            return self.answer.value
        return CONSTANTS.get(name)
