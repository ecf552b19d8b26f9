"""Input normalization and tokenizing.

This module handles:
- Normalizing raw input (decimal separators, whitespace)
- Splitting input into operator, operand and parenthesis tokens
- Publishing the set of characters the evaluator accepts
- Balancing helpers used before submitting interactive input
"""

from __future__ import annotations

import re

from .config import MAX_INPUT_LENGTH
from .context import CONSTANT_NAMES
from .operators import OPERATOR_SYMBOLS
from .types import NotationError

OPEN_PAREN = "("
CLOSE_PAREN = ")"

DIGITS = frozenset("0123456789")

# Every character the evaluator can make sense of
USED_SYMBOLS = frozenset(
    OPERATOR_SYMBOLS
    | {char for name in CONSTANT_NAMES for char in name}
    | DIGITS
    | {".", ",", " ", OPEN_PAREN, CLOSE_PAREN}
)

_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_RE = re.compile(r"[()]|[^\s()]+")


def normalize(input_str: str) -> str:
    """Use "." as decimal separator, collapse whitespace and trim.

    Raises:
        NotationError: If the input is too long or empty after trimming
    """
    if len(input_str) > MAX_INPUT_LENGTH:
        raise NotationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)!", "TOO_LONG"
        )
    text = _WHITESPACE_RE.sub(" ", input_str.replace(",", ".")).strip()
    if not text:
        raise NotationError("Empty input!", "EMPTY_INPUT")
    return text


def tokenize(text: str) -> list[str]:
    """Split normalized text into tokens.

    Parentheses are always tokens of their own, so "(+ 1 2)" and
    "( + 1 2 )" tokenize the same way.
    """
    return _TOKEN_RE.findall(text)


def is_accepted(char: str) -> bool:
    """Whether a single keystroke belongs to the accepted character set."""
    return char in USED_SYMBOLS


def filter_input(raw: str) -> str:
    """Drop every character the evaluator would not accept."""
    return "".join(char for char in raw if char in USED_SYMBOLS)


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(input_str):
        if char == OPEN_PAREN:
            stack.append(i)
        elif char == CLOSE_PAREN:
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]
    return True, None


def close_parentheses(input_str: str) -> str:
    """Append the closing parentheses that ``input_str`` is missing."""
    missing = input_str.count(OPEN_PAREN) - input_str.count(CLOSE_PAREN)
    if missing > 0:
        return input_str.rstrip() + CLOSE_PAREN * missing
    return input_str
