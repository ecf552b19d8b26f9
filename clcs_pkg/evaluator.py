"""Prefix-notation expression evaluator.

Grammar::

    expression := operator operand*
    operand    := number | constant | "(" expression ")" | expression

An operator appearing where an operand is expected starts a nested
expression that takes every remaining token of the current level as its
own. A single operand is combined with the running answer, so ``+ 5``
means ``ans + 5``.

Every completed reduction, nested ones included, rounds its result and
stores it as the new answer. When an outer reduction fails after an inner
one succeeded, the answer keeps the inner result.
"""

from __future__ import annotations

import math

from .config import ANS_DEFAULT, MAX_EXPRESSION_DEPTH
from .context import EvaluationContext
from .logging_config import get_logger
from .numeric import clamp_precision, format_number, parse_number
from .operators import Operator, apply_operator
from .parser import CLOSE_PAREN, OPEN_PAREN, is_balanced, normalize, tokenize
from .types import (
    ExpressionTooDeepError,
    NotationError,
    NumberError,
    TraceResult,
)

logger = get_logger("evaluator")

# Submitting this resets "ans", since the grammar has no assignment
RESET_EXPRESSION = f"+ (- 1 1) {format_number(ANS_DEFAULT)}"


def format_step(op: Operator, operands: list[float]) -> str:
    return " ".join([op.value, *(format_number(value) for value in operands)])


class _Evaluation:
    """State of one top-level evaluate() call."""

    def __init__(
        self,
        tokens: list[str],
        context: EvaluationContext,
        digits: int,
        verbose: bool,
        max_depth: int,
    ):
        self.tokens = tokens
        self.pos = 0
        self.context = context
        self.digits = digits
        self.max_depth = max_depth
        self.steps: list[str] | None = [] if verbose else None

    def _peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def run(self) -> float:
        return self.expression(1)

    def expression(self, depth: int) -> float:
        if depth > self.max_depth:
            raise ExpressionTooDeepError(self.max_depth)

        token = self._peek()
        op = Operator.lookup(token) if token is not None else None
        if op is None:
            raise NotationError(f"Invalid symbol ({token})!", "INVALID_SYMBOL")
        self.pos += 1

        operands: list[float] = []
        while self._peek() not in (None, CLOSE_PAREN):
            token = self.tokens[self.pos]
            if token == OPEN_PAREN:
                self.pos += 1
                operands.append(self.group(depth + 1))
            elif Operator.lookup(token) is not None:
                # The nested expression consumes the rest of this level
                operands.append(self.expression(depth + 1))
                break
            else:
                self.pos += 1
                operands.append(self.operand(token))

        return self.reduce(op, operands)

    def group(self, depth: int) -> float:
        if self._peek() == CLOSE_PAREN:
            raise NotationError("Empty parentheses!", "EMPTY_INPUT")
        value = self.expression(depth)
        # Input is balanced, so the group ends at a closing parenthesis
        self.pos += 1
        return value

    def operand(self, token: str) -> float:
        value = self.context.resolve_constant(token)
        if value is None:
            value = parse_number(token)
        if value is None:
            raise NumberError(token)
        return value

    def reduce(self, op: Operator, operands: list[float]) -> float:
        if not operands:
            raise NotationError("No valid operands found!", "NO_OPERANDS")
        if len(operands) == 1:
            operands.insert(0, self.context.answer.value)

        step = format_step(op, operands)
        result = apply_operator(op, operands, self.context.random_source)
        if math.isnan(result):
            logger.debug("Reduction %r is not a number", step)
            raise NotationError(f"Result of ({step}) is not a number!", "NOT_A_NUMBER")
        if math.isinf(result):
            logger.debug("Reduction %r is infinite", step)
            raise NotationError(f"Result of ({step}) is infinite!", "INFINITE_RESULT")

        result = self.context.answer.set(result, self.digits)
        logger.debug("Reduced %r to %s", step, format_number(result))
        if self.steps is not None:
            self.steps.append(step)
        return result


def evaluate(
    expression: str,
    context: EvaluationContext,
    verbose: bool = False,
    precision: int | None = None,
    max_depth: int = MAX_EXPRESSION_DEPTH,
) -> float | TraceResult:
    """Evaluate a prefix-notation expression.

    Args:
        expression: Raw input line (e.g. "+ 1 2", "* (+ 1 2) 3")
        context: Evaluation state; its answer is updated on success
        verbose: Return a TraceResult with every reduction step
        precision: Decimal digits for rounding (negative means 0);
            defaults to the context's precision setting
        max_depth: Maximum nesting of groups and nested operators

    Returns:
        The rounded result, or a TraceResult if ``verbose`` is set

    Raises:
        NotationError: Malformed input or a non-finite result
        NumberError: An operand that is neither a constant nor a number
        ExpressionTooDeepError: Nesting deeper than ``max_depth``
    """
    if precision is None:
        precision = context.precision.value
    digits = clamp_precision(precision)
    text = normalize(expression)
    balanced, position = is_balanced(text)
    if not balanced:
        # Checked before any reduction updates "ans"
        if text[position] == CLOSE_PAREN:
            raise NotationError("Unmatched closing parenthesis!", "UNBALANCED")
        raise NotationError("Unmatched opening parenthesis!", "UNBALANCED")
    tokens = tokenize(text)

    evaluation = _Evaluation(tokens, context, digits, verbose, max_depth)
    result = evaluation.run()
    if evaluation.steps is not None:
        return TraceResult(result=result, steps=evaluation.steps)
    return result
