"""Data models for the progressing test reporter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EventKind(Enum):
    """Kind of outcome event delivered by a test runner."""

    FAILURE = "failure"
    ERROR = "error"
    WARNING = "warning"
    SKIPPED = "skipped"
    INCOMPLETE = "incomplete"
    RISKY = "risky"


class Category(Enum):
    """Category an unstable test is listed under.

    Members are declared in summary order; the value is the summary label.
    """

    FAILED = "failed"
    WARNED = "warned"
    ERRORED = "errored"
    SKIPPED = "skipped"
    INCOMPLETE = "incomplete"
    RISKY = "risky"


class Verdict(Enum):
    """Overall verdict printed in the summary footer."""

    NO_TESTS = "No tests executed!"
    SUCCESS = "Success!"
    OK_BUT_INCOMPLETE = "OK, but incomplete, skipped, or risky tests!"
    FAILURES = "Failures!"


@dataclass(frozen=True)
class Classification:
    """Where an outcome is listed, and whether it also tallies as an error."""

    category: Category
    counts_as_error: bool = False


@dataclass(frozen=True)
class TestItem:
    """A leaf test as seen by the reporter.

    ``assertion_count`` is None when the runner cannot introspect it.
    """

    __test__ = False

    name: str
    assertion_count: Optional[int] = None

    @property
    def assertion_credit(self) -> int:
        """Assertions credited to the run when this test ends."""
        if self.assertion_count is None:
            return 1
        return self.assertion_count


@dataclass(frozen=True)
class SuiteItem:
    """A (possibly nested) suite and its total number of leaf tests."""

    name: str
    test_count: int


@dataclass(frozen=True)
class OutcomeRecord:
    """A single unstable outcome."""

    test_name: str
    message: str
    counts_as_error: bool = False


def _empty_outcomes() -> dict[Category, list[OutcomeRecord]]:
    return {category: [] for category in Category}


@dataclass
class RunState:
    """Accumulated state of a single test run."""

    planned_count: int = -1
    completed_count: int = 0
    assertion_count: int = 0
    outcomes: dict[Category, list[OutcomeRecord]] = field(default_factory=_empty_outcomes)
    summary_printed: bool = False

    @property
    def is_planned(self) -> bool:
        """True once the outermost suite has announced its test count."""
        return self.planned_count >= 0

    @property
    def is_complete(self) -> bool:
        """True when every planned test has ended."""
        return self.is_planned and self.completed_count == self.planned_count

    def record(self, category: Category, record: OutcomeRecord) -> None:
        """Append a record to its category, keeping arrival order."""
        self.outcomes[category].append(record)

    def count(self, *categories: Category) -> int:
        """Total number of records in the given categories."""
        return sum(len(self.outcomes[category]) for category in categories)

    @property
    def unstable_count(self) -> int:
        """Records in any category."""
        return self.count(*Category)

    @property
    def failure_count(self) -> int:
        """Records in the failed category."""
        return self.count(Category.FAILED)

    @property
    def error_count(self) -> int:
        """Records tallied as errors, whatever category they are listed under."""
        return sum(
            1
            for records in self.outcomes.values()
            for record in records
            if record.counts_as_error
        )

    @property
    def has_unstable_tests(self) -> bool:
        """Whether any test produced a record, which adds the summary header."""
        return self.unstable_count > 0

    @property
    def was_successful(self) -> bool:
        """No failed, errored or warned records (skips and the like do not count)."""
        return self.count(Category.FAILED, Category.ERRORED, Category.WARNED) == 0

    def verdict(self) -> Verdict:
        """Pick the footer verdict; exactly one applies to any state."""
        if self.completed_count == 0:
            return Verdict.NO_TESTS
        if not self.has_unstable_tests:
            return Verdict.SUCCESS
        if self.was_successful:
            return Verdict.OK_BUT_INCOMPLETE
        return Verdict.FAILURES
