"""Tests for the input history navigator."""

import pytest

from clcs_pkg.evaluator import RESET_EXPRESSION
from clcs_pkg.history import InputHistory


@pytest.fixture
def history():
    return InputHistory()


class TestAdd:
    def test_seeded_with_reset_expression(self, history):
        assert history.entries == (RESET_EXPRESSION,)
        assert len(history) == 1

    def test_resubmitted_entry_moves_to_end(self, history):
        history.add("a")
        history.add("b")
        history.add("a")
        assert history.entries == (RESET_EXPRESSION, "b", "a")

    def test_repeating_last_entry_is_noop(self, history):
        history.add("a")
        history.add("a")
        assert history.entries == (RESET_EXPRESSION, "a")

    def test_add_clears_cursor(self, history):
        history.add("a")
        history.previous("draft")
        history.add("b")
        assert history.cursor is None
        assert history.draft is None
        assert not history.browsing


class TestNavigation:
    @pytest.fixture
    def filled(self, history):
        history.add("a")
        history.add("b")
        return history

    def test_previous_starts_at_last_entry(self, filled):
        assert filled.previous("draft") == "b"
        assert filled.browsing
        assert filled.draft == "draft"

    def test_previous_walks_back_and_clamps(self, filled):
        assert filled.previous("draft") == "b"
        assert filled.previous("ignored") == "a"
        assert filled.previous("ignored") == RESET_EXPRESSION
        assert filled.previous("ignored") == RESET_EXPRESSION
        assert filled.cursor == 0
        assert filled.draft == "draft"

    def test_next_starts_at_last_entry(self, filled):
        assert filled.next("draft") == "b"

    def test_next_returns_draft_and_stays(self, filled):
        filled.previous("draft")
        filled.previous()
        filled.previous()
        assert filled.next() == "a"
        assert filled.next() == "b"
        assert filled.next() == "draft"
        assert filled.next() == "draft"
        assert filled.cursor == len(filled)

    def test_previous_after_passing_end(self, filled):
        filled.next("draft")
        assert filled.next() == "draft"
        assert filled.previous() == "b"

    def test_missing_draft_becomes_empty(self, filled):
        filled.next(None)
        assert filled.next() == ""

    def test_reset_cursor_keeps_log(self, filled):
        filled.previous("draft")
        filled.reset_cursor()
        assert filled.cursor is None
        assert filled.draft is None
        assert filled.entries == (RESET_EXPRESSION, "a", "b")
        assert filled.previous("new") == "b"
        assert filled.draft == "new"


class TestResetHistory:
    def test_reset_history(self, history):
        history.add("a")
        history.previous("draft")
        history.reset_history()
        assert history.entries == (RESET_EXPRESSION,)
        assert history.cursor is None
        assert history.draft is None

    def test_str(self, history):
        history.add("a")
        text = str(history)
        assert "cursor: None" in text
        assert "a" in text
