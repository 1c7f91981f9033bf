"""Tests for data models."""

import pytest

from progress_printer.models import (
    Category,
    EventKind,
    OutcomeRecord,
    RunState,
    SuiteItem,
    TestItem,
    Verdict,
)


def make_state(completed=1, **records) -> RunState:
    """Build a finished RunState with the given number of records per category."""
    state = RunState(planned_count=completed, completed_count=completed)
    for name, count in records.items():
        category = Category[name.upper()]
        for i in range(count):
            state.record(category, OutcomeRecord(f"test_{name}_{i}", "boom"))
    return state


class TestEnums:
    """Tests for the event and category enums."""

    def test_event_kinds(self):
        """All six outcome event kinds exist."""
        assert {kind.value for kind in EventKind} == {
            "failure", "error", "warning", "skipped", "incomplete", "risky",
        }

    def test_category_summary_order(self):
        """Categories iterate in summary order."""
        assert list(Category) == [
            Category.FAILED,
            Category.WARNED,
            Category.ERRORED,
            Category.SKIPPED,
            Category.INCOMPLETE,
            Category.RISKY,
        ]

    def test_category_labels(self):
        """Category values are the summary labels."""
        assert Category.FAILED.value == "failed"
        assert Category.INCOMPLETE.value == "incomplete"

    def test_verdict_texts(self):
        """Verdict values are the footer texts."""
        assert Verdict.NO_TESTS.value == "No tests executed!"
        assert Verdict.SUCCESS.value == "Success!"
        assert Verdict.OK_BUT_INCOMPLETE.value == "OK, but incomplete, skipped, or risky tests!"
        assert Verdict.FAILURES.value == "Failures!"


class TestTestItem:
    """Tests for TestItem assertion crediting."""

    def test_unknown_count_credits_one(self):
        """Tests without an introspectable count contribute one assertion."""
        assert TestItem("t").assertion_credit == 1

    def test_known_count_used_as_is(self):
        """Introspected counts are credited unchanged, including zero."""
        assert TestItem("t", assertion_count=7).assertion_credit == 7
        assert TestItem("t", assertion_count=0).assertion_credit == 0

    def test_suite_item(self):
        suite = SuiteItem("root", 3)
        assert suite.test_count == 3


class TestRunState:
    """Tests for RunState accumulation."""

    def test_defaults(self):
        """A fresh state is unplanned and empty."""
        state = RunState()
        assert state.planned_count == -1
        assert state.completed_count == 0
        assert state.assertion_count == 0
        assert state.is_planned is False
        assert state.is_complete is False
        assert state.summary_printed is False
        assert all(records == [] for records in state.outcomes.values())
        assert set(state.outcomes) == set(Category)

    def test_instances_do_not_share_outcomes(self):
        first, second = RunState(), RunState()
        first.record(Category.FAILED, OutcomeRecord("t", "m"))
        assert second.failure_count == 0

    def test_is_complete(self):
        """Complete exactly when the completed count reaches the plan."""
        state = RunState(planned_count=2, completed_count=1)
        assert state.is_complete is False
        state.completed_count = 2
        assert state.is_complete is True

    def test_zero_planned_is_complete(self):
        assert RunState(planned_count=0).is_complete is True

    def test_record_appends_in_order(self):
        state = RunState()
        state.record(Category.SKIPPED, OutcomeRecord("a", "1"))
        state.record(Category.SKIPPED, OutcomeRecord("b", "2"))
        assert [r.test_name for r in state.outcomes[Category.SKIPPED]] == ["a", "b"]

    def test_error_count_uses_dual_bucket_flag(self):
        """Records flagged as errors are tallied whatever their category."""
        state = RunState()
        state.record(Category.WARNED, OutcomeRecord("w", "m", counts_as_error=True))
        state.record(Category.RISKY, OutcomeRecord("r", "m", counts_as_error=True))
        state.record(Category.SKIPPED, OutcomeRecord("s", "m"))
        state.record(Category.FAILED, OutcomeRecord("f", "m"))

        assert state.error_count == 2
        assert state.failure_count == 1
        assert state.unstable_count == 4


class TestVerdict:
    """Tests for footer verdict precedence."""

    def test_no_tests(self):
        assert make_state(completed=0).verdict() == Verdict.NO_TESTS

    def test_no_tests_wins_over_records(self):
        """An empty run reports no tests even if outcome records exist."""
        assert make_state(completed=0, failed=1).verdict() == Verdict.NO_TESTS

    def test_success(self):
        assert make_state(completed=3).verdict() == Verdict.SUCCESS

    @pytest.mark.parametrize("category", ["skipped", "incomplete", "risky"])
    def test_ok_but_incomplete(self, category):
        """Only skipped, incomplete or risky tests is still a passing run."""
        state = make_state(completed=3, **{category: 1})
        assert state.verdict() == Verdict.OK_BUT_INCOMPLETE

    @pytest.mark.parametrize("category", ["failed", "errored", "warned"])
    def test_failures(self, category):
        state = make_state(completed=3, skipped=1, **{category: 1})
        assert state.verdict() == Verdict.FAILURES

    def test_was_successful(self):
        assert make_state(skipped=2, risky=1).was_successful is True
        assert make_state(errored=1).was_successful is False
