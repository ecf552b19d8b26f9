"""Public API for clcs, bound to one default session per process.

The evaluator itself takes an explicit :class:`EvaluationContext`; these
helpers pass the module's default context and history so callers that only
need a single calculator do not have to manage state themselves.
"""

from __future__ import annotations

from .context import EvaluationContext
from .evaluator import RESET_EXPRESSION
from .evaluator import evaluate as _evaluate
from .history import InputHistory
from .logging_config import get_logger
from .parser import USED_SYMBOLS, normalize, tokenize
from .types import CalculatorError, TraceResult

__all__ = [
    "RESET_EXPRESSION",
    "USED_SYMBOLS",
    "evaluate",
    "get_context",
    "get_history",
    "reset_answer",
    "reset_session",
    "validate_expression",
]

logger = get_logger("api")

_context = EvaluationContext()
_history = InputHistory()


def get_context() -> EvaluationContext:
    return _context


def get_history() -> InputHistory:
    return _history


def evaluate(
    expression: str, verbose: bool = False, precision: int | None = None
) -> float | TraceResult:
    """Evaluate an expression against the default session.

    Args:
        expression: Prefix-notation expression (e.g., "+ 1 2", "* (+ 1 2) ans")
        verbose: Return a TraceResult holding every reduction step
        precision: Decimal digits to round to (default: session precision)

    Returns:
        The rounded result, or a TraceResult when ``verbose`` is set

    Example:
        >>> from clcs_pkg.api import evaluate
        >>> evaluate("+ 1 2")
        3.0
        >>> evaluate("+ 5")
        8.0
        >>> evaluate("+ (* 2 3) 1", verbose=True)
        TraceResult(result=7.0, steps=['* 2 3', '+ 6 1'])
    """
    return _evaluate(expression, _context, verbose=verbose, precision=precision)


def reset_answer() -> float:
    """Reset "ans" by submitting RESET_EXPRESSION."""
    return _evaluate(RESET_EXPRESSION, _context)


def reset_session() -> None:
    """Soft reset: clear history, answer and precision."""
    _history.reset_history()
    reset_answer()
    _context.precision.reset()
    logger.info("Session reset")


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression normalizes and tokenizes without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from clcs_pkg.api import validate_expression
        >>> validate_expression("+ 1 2")
        (True, None)
        >>> validate_expression("   ")
        (False, 'Empty input!')
    """
    try:
        tokens = tokenize(normalize(expression))
    except CalculatorError as e:
        return False, str(e)
    unknown = sorted({char for token in tokens for char in token} - USED_SYMBOLS)
    if unknown:
        return False, f"Unsupported characters: {''.join(unknown)}"
    return True, None
