"""Type definitions: evaluation trace record and calculator errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TraceResult:
    """Result of a verbose evaluation.

    ``steps`` holds the textual form of every completed reduction,
    innermost first, ending with the outermost one.
    """

    result: float
    steps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"result": self.result, "steps": list(self.steps)}

    def __repr__(self) -> str:
        return f"TraceResult(result={self.result!r}, steps={self.steps!r})"


class CalculatorError(Exception):
    """Base class for every error raised while evaluating an expression."""

    def __init__(self, message: str, code: str = "CALCULATOR_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class NotationError(CalculatorError):
    """Raised when the input is not valid prefix notation."""

    def __init__(
        self,
        message: str = "The given input is not valid notation!",
        code: str = "NOTATION_ERROR",
    ):
        super().__init__(message, code)


class NumberError(CalculatorError):
    """Raised when an operand is neither a known constant nor a number."""

    def __init__(self, token: str, code: str = "NUMBER_ERROR"):
        self.token = token
        super().__init__(f"Invalid number ({token})!", code)


class ExpressionTooDeepError(NotationError):
    """Raised when nesting exceeds MAX_EXPRESSION_DEPTH."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Expression too deep (>{limit} levels)!", "TOO_DEEP")
