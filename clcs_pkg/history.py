"""History of accepted expressions with previous/next navigation.

The log is kept in most-recently-used order without duplicates. While
browsing, the navigator remembers the unsubmitted draft so stepping past
the newest entry gives it back.
"""

from __future__ import annotations

from .evaluator import RESET_EXPRESSION
from .logging_config import get_logger

logger = get_logger("history")


class InputHistory:
    """Ordered log of accepted expressions plus a browsing cursor."""

    def __init__(self, sentinel: str = RESET_EXPRESSION):
        self._sentinel = sentinel
        self._inputs: list[str] = [sentinel]
        self._index: int | None = None
        self._draft: str | None = None

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._inputs)

    @property
    def cursor(self) -> int | None:
        return self._index

    @property
    def draft(self) -> str | None:
        return self._draft

    @property
    def browsing(self) -> bool:
        return self._index is not None

    def __len__(self) -> int:
        return len(self._inputs)

    def add(self, expression: str) -> None:
        """Append an accepted expression, moving an older copy to the end."""
        self.reset_cursor()
        if self._inputs and self._inputs[-1] == expression:
            return
        if expression in self._inputs:
            self._inputs.remove(expression)
        self._inputs.append(expression)
        logger.debug("History entry added: %r (%d entries)", expression, len(self._inputs))

    def _start_browsing(self, draft: str | None) -> bool:
        """Capture the draft and jump to the newest entry on the first step.

        Returns True if browsing started with this call.
        """
        if self._draft is None:
            self._draft = draft or ""
        if self._index is None:
            self._index = len(self._inputs) - 1
            return True
        return False

    def previous(self, draft: str | None = None) -> str:
        """Step to the previous entry, stopping at the oldest one."""
        if self._start_browsing(draft):
            return self._inputs[self._index]
        if self._index > 0:
            self._index -= 1
        return self._inputs[self._index]

    def next(self, draft: str | None = None) -> str:
        """Step to the next entry; past the newest one, return the draft."""
        if self._start_browsing(draft):
            return self._inputs[self._index]
        if self._index >= len(self._inputs) - 1:
            self._index = len(self._inputs)
            return self._draft
        self._index += 1
        return self._inputs[self._index]

    def reset_cursor(self) -> None:
        self._index = None
        self._draft = None

    def reset_history(self) -> None:
        self._inputs = [self._sentinel]
        self.reset_cursor()
        logger.debug("History reset")

    def __str__(self) -> str:
        inputs = ",\n        ".join(self._inputs)
        return (
            f"cursor: {self._index}\n"
            f"draft: {self._draft!r}\n"
            f"inputs: {inputs}"
        )
