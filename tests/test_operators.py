"""Tests for the operator registry and random source."""

import math

import pytest

from clcs_pkg.operators import (
    OPERATOR_SYMBOLS,
    NumpyRandomSource,
    Operator,
    apply_operator,
    random_in_range,
)
from clcs_pkg.types import NotationError


class RecordingSource:
    """Random source that returns the lower bound and records every draw."""

    def __init__(self):
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        return low


@pytest.fixture
def source():
    return RecordingSource()


class TestLookup:
    def test_all_symbols(self):
        assert OPERATOR_SYMBOLS == {"+", "-", "*", "/", "^", "\\", "%", "r"}

    def test_lookup_known(self):
        assert Operator.lookup("^") is Operator.POWER
        assert Operator.lookup("\\") is Operator.INT_DIVIDE

    def test_lookup_unknown(self):
        assert Operator.lookup("pi") is None
        assert Operator.lookup("++") is None


class TestFold:
    def test_left_fold(self, source):
        assert apply_operator(Operator.ADD, [1, 2, 3], source) == 6
        assert apply_operator(Operator.SUBTRACT, [10, 1, 2, 3], source) == 4
        assert apply_operator(Operator.MULTIPLY, [2, 3, 4], source) == 24
        assert apply_operator(Operator.DIVIDE, [100, 5, 2], source) == 10
        assert apply_operator(Operator.POWER, [2, 3, 2], source) == 64

    def test_single_operand_is_seed(self, source):
        assert apply_operator(Operator.SUBTRACT, [7], source) == 7

    def test_no_operands(self, source):
        with pytest.raises(ValueError):
            apply_operator(Operator.ADD, [], source)

    def test_zero_divisor_yields_zero(self, source):
        assert apply_operator(Operator.DIVIDE, [10, 0], source) == 0
        assert apply_operator(Operator.INT_DIVIDE, [10, 0], source) == 0
        assert apply_operator(Operator.MODULO, [10, 0], source) == 0

    def test_zero_divisor_only_affects_its_step(self, source):
        assert apply_operator(Operator.DIVIDE, [10, 0, 5], source) == 0
        assert apply_operator(Operator.ADD, [1, 0], source) == 1

    def test_integer_divide_truncates(self, source):
        assert apply_operator(Operator.INT_DIVIDE, [7, 2], source) == 3
        assert apply_operator(Operator.INT_DIVIDE, [-7, 2], source) == -3

    def test_modulo_keeps_dividend_sign(self, source):
        assert apply_operator(Operator.MODULO, [7, 3], source) == 1
        assert apply_operator(Operator.MODULO, [-7, 3], source) == -1

    def test_power_overflow_is_infinite(self, source):
        assert math.isinf(apply_operator(Operator.POWER, [10, 400], source))

    def test_zero_to_negative_power_is_infinite(self, source):
        assert math.isinf(apply_operator(Operator.POWER, [0, -1], source))

    def test_complex_power_is_nan(self, source):
        assert math.isnan(apply_operator(Operator.POWER, [-8, 0.5], source))


class TestRandom:
    def test_range_between_operands(self, source):
        assert apply_operator(Operator.RANDOM, [1, 6], source) == 1
        assert source.calls == [(1, 6)]

    def test_order_independent(self, source):
        apply_operator(Operator.RANDOM, [6, 1], source)
        assert source.calls == [(1, 6)]

    def test_single_operand_ranges_from_one(self, source):
        apply_operator(Operator.RANDOM, [6], source)
        assert source.calls == [(1, 6)]

    def test_bounds_truncated(self, source):
        random_in_range(source, 2.9, 5.7)
        assert source.calls == [(2, 5)]

    def test_equal_bounds_skip_the_draw(self, source):
        assert apply_operator(Operator.RANDOM, [5, 5], source) == 5
        assert apply_operator(Operator.RANDOM, [5.2, 5.9], source) == 5
        assert source.calls == []

    def test_numpy_source_stays_in_range(self):
        rng = NumpyRandomSource(seed=0)
        values = {random_in_range(rng, 1, 3) for _ in range(50)}
        assert values <= {1.0, 2.0, 3.0}

    def test_numpy_source_is_seedable(self):
        rng_a, rng_b = NumpyRandomSource(42), NumpyRandomSource(42)
        first = [random_in_range(rng_a, 1, 1000) for _ in range(5)]
        second = [random_in_range(rng_b, 1, 1000) for _ in range(5)]
        assert first == second

    def test_out_of_bounds_range(self):
        with pytest.raises(NotationError):
            random_in_range(NumpyRandomSource(0), 0, 1e30)
