"""Bridge between the standard library unittest runner and a Reporter.

Translates unittest's result callbacks into reporter events:
- startTest / stopTest          -> on_test_start / on_test_end
- addFailure / addError         -> FAILURE / ERROR outcomes
- addSkip                       -> SKIPPED outcome
- addUnexpectedSuccess          -> RISKY outcome
- failing subtests              -> one FAILURE or ERROR outcome per test
- warnings emitted by a test    -> WARNING outcome (only if nothing else happened)

A test's on_test_end is held back until the next test starts or the run
stops. unittest runs tearDownClass and tearDownModule after the last
test's stopTest, so errors raised there still reach the reporter before
the summary does.
"""

import time
import unittest
import warnings
from typing import Iterator, Optional

from progress_printer.chain import describe_exception
from progress_printer.models import EventKind, SuiteItem, TestItem
from progress_printer.reporters.base import Reporter

UNEXPECTED_SUCCESS_MESSAGE = "Test was expected to fail but passed"
NOT_RUN_MESSAGE = "Not run (a fixture failed or the run was stopped early)"


def iter_leaf_tests(test) -> Iterator[unittest.TestCase]:
    """Yield every leaf test in a (possibly nested) suite."""
    if isinstance(test, unittest.TestSuite):
        for child in test:
            yield from iter_leaf_tests(child)
    else:
        yield test


def describe_test(test) -> str:
    """Stable display name for a test, subtest or fixture error holder."""
    if hasattr(test, "id"):
        return test.id()
    return str(test)


def make_test_item(test) -> TestItem:
    """Build a TestItem, picking up an integer ``assertion_count`` attribute if present."""
    count = getattr(test, "assertion_count", None)
    if not isinstance(count, int) or isinstance(count, bool):
        count = None
    return TestItem(describe_test(test), assertion_count=count)


def strip_unittest_frames(error: BaseException) -> BaseException:
    """Drop the leading unittest machinery frames from an exception's traceback.

    Uses the same ``__unittest`` module marker unittest itself relies on
    when it formats failures.
    """
    tb = error.__traceback__
    while tb is not None and "__unittest" in tb.tb_frame.f_globals:
        tb = tb.tb_next
    return error.with_traceback(tb)


def subtest_label(test, subtest) -> str:
    """The parameter part of a subtest id, e.g. ``(i=1)``."""
    parent, own = describe_test(test), describe_test(subtest)
    if own.startswith(parent):
        return own[len(parent):].strip() or own
    return own


class ProgressTestResult(unittest.TestResult):
    """unittest result forwarding every event to a Reporter.

    Args:
        reporter: Reporter receiving the events
    """

    def __init__(self, reporter: Reporter, stream=None, descriptions=None, verbosity=None):
        super().__init__(stream, descriptions, verbosity)
        self.reporter = reporter
        self._planned: list[unittest.TestCase] = []
        self._started_ids: set[str] = set()
        self._started_at = 0.0
        self._outcome_kind: Optional[EventKind] = None
        self._failed_subtests: list[tuple] = []
        self._pending_end: Optional[tuple[TestItem, float]] = None
        self._warning_catcher: Optional[warnings.catch_warnings] = None
        self._caught: list[warnings.WarningMessage] = []

    def plan(self, suite) -> None:
        """Remember the tests of a suite before it runs (suites drop tests as they go)."""
        self._planned = list(iter_leaf_tests(suite))

    def startTest(self, test) -> None:
        self._flush_test_end()
        super().startTest(test)
        self._started_ids.add(describe_test(test))
        self._started_at = time.perf_counter()
        self._outcome_kind = None
        self._failed_subtests = []

        self._warning_catcher = warnings.catch_warnings(record=True)
        self._caught = self._warning_catcher.__enter__()
        warnings.simplefilter("default")

        self.reporter.on_test_start(make_test_item(test))

    def stopTest(self, test) -> None:
        elapsed = time.perf_counter() - self._started_at

        if self._warning_catcher is not None:
            self._warning_catcher.__exit__(None, None, None)
            self._warning_catcher = None

        self._report_subtests(test)
        if self._caught and self._outcome_kind is None:
            message = "\n".join(describe_exception(w.message) for w in self._caught)
            self._report(test, EventKind.WARNING, message)
        self._caught = []

        self._pending_end = (make_test_item(test), elapsed)
        super().stopTest(test)

    def stopTestRun(self) -> None:
        self._flush_test_end()

        # Tests the suite never reached still have to be accounted for
        for test in self._planned:
            if describe_test(test) in self._started_ids:
                continue
            item = TestItem(describe_test(test), assertion_count=0)
            self.reporter.on_test_start(item)
            self.reporter.on_outcome(item, EventKind.SKIPPED, NOT_RUN_MESSAGE)
            self.reporter.on_test_end(item, 0.0)
        super().stopTestRun()

    def _flush_test_end(self) -> None:
        if self._pending_end is None:
            return
        item, elapsed = self._pending_end
        self._pending_end = None
        self.reporter.on_test_end(item, elapsed)

    def _report(self, test, kind: EventKind, error) -> None:
        self._outcome_kind = kind
        self.reporter.on_outcome(make_test_item(test), kind, error)

    def _report_subtests(self, test) -> None:
        """Fold the failing subtests of a test into a single outcome."""
        failed, self._failed_subtests = self._failed_subtests, []
        if not failed or self._outcome_kind in (EventKind.FAILURE, EventKind.ERROR):
            return

        if any(kind == EventKind.ERROR for _, kind, _ in failed):
            kind = EventKind.ERROR
        else:
            kind = EventKind.FAILURE

        if len(failed) == 1:
            subtest, _, error = failed[0]
            self._report(subtest, kind, error)
            return

        message = "\n".join(
            f"{subtest_label(test, subtest)} {describe_exception(error)}"
            for subtest, _, error in failed
        )
        self._report(test, kind, message)

    def addFailure(self, test, err) -> None:
        super().addFailure(test, err)
        self._report(test, EventKind.FAILURE, strip_unittest_frames(err[1]))

    def addError(self, test, err) -> None:
        super().addError(test, err)
        self._report(test, EventKind.ERROR, strip_unittest_frames(err[1]))

    def addSkip(self, test, reason) -> None:
        super().addSkip(test, reason)
        self._report(test, EventKind.SKIPPED, reason)

    def addUnexpectedSuccess(self, test) -> None:
        super().addUnexpectedSuccess(test)
        self._report(test, EventKind.RISKY, UNEXPECTED_SUCCESS_MESSAGE)

    def addSubTest(self, test, subtest, err) -> None:
        super().addSubTest(test, subtest, err)
        if err is None:
            return
        if issubclass(err[0], test.failureException):
            kind = EventKind.FAILURE
        else:
            kind = EventKind.ERROR
        self._failed_subtests.append((subtest, kind, strip_unittest_frames(err[1])))


class ProgressTestRunner:
    """Runs a unittest suite, reporting progress through a Reporter.

    Args:
        reporter: Reporter receiving the events
        failfast: Stop the run at the first failure or error
    """

    resultclass = ProgressTestResult

    def __init__(self, reporter: Reporter, failfast: bool = False):
        self.reporter = reporter
        self.failfast = failfast

    def run(self, test, name: str = "tests") -> ProgressTestResult:
        """Run a test or suite and return the result."""
        result = self.resultclass(self.reporter)
        result.failfast = self.failfast
        result.plan(test)

        suite = SuiteItem(name, test.countTestCases())
        self.reporter.on_suite_start(suite)
        result.startTestRun()
        try:
            test(result)
        finally:
            result.stopTestRun()
        self.reporter.on_suite_end(suite)

        return result
