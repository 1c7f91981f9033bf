"""Console reporter that keeps a live progress bar on screen.

Failures and errors are announced as soon as they happen, interleaved
with the progress bar; everything else unstable (warnings, skipped,
incomplete and risky tests) is only listed in the final summary.
"""

import logging
from contextlib import nullcontext
from typing import Callable, Optional, Union

from rich.console import Console
from rich.text import Text

from progress_printer.chain import render_exception
from progress_printer.classifier import ANNOUNCED_CATEGORIES, classify
from progress_printer.config import ReporterConfig
from progress_printer.models import (
    Category,
    Classification,
    EventKind,
    OutcomeRecord,
    RunState,
    SuiteItem,
    TestItem,
)
from progress_printer.progress import ProgressDisplay
from progress_printer.reporters.base import Reporter
from progress_printer.reporters.summary import SummaryReporter
from progress_printer.resources import ResourceTimer

logger = logging.getLogger(__name__)

FAILURE_HEADER_STYLE = "bold white on red"

ANNOUNCEMENT_LABELS = {
    Category.FAILED: "Failed",
    Category.ERRORED: "Errored",
}


class ProgressingReporter(Reporter):
    """Reporter drawing a progress bar, then a categorized summary.

    Owns all state for one run: construct one per run.

    Args:
        console: Console to draw on (a new one is created if omitted)
        config: Display settings
        resource_usage: Callable returning the footer's resource usage line
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        config: Optional[ReporterConfig] = None,
        resource_usage: Optional[Callable[[], str]] = None,
    ):
        self.config = config or ReporterConfig()
        # Use legacy_windows=True for ASCII-safe output on Windows consoles
        self.console = console or Console(legacy_windows=True, no_color=not self.config.color)
        self.resource_usage = resource_usage or ResourceTimer().resource_usage
        self.state = RunState()
        self.progress: Optional[ProgressDisplay] = None
        self.summary = SummaryReporter(self.console, rule_width=self.config.rule_width)
        self._suite_depth = 0

    def on_suite_start(self, suite: SuiteItem) -> None:
        """Capture the planned test count from the outermost suite."""
        if not self.state.is_planned:
            self.state.planned_count = suite.test_count
            logger.debug("Planned %d tests from suite %r", suite.test_count, suite.name)

        if self.progress is None:
            self.progress = ProgressDisplay(
                self.console,
                self.state.planned_count,
                bar_width=self.config.bar_width,
            )
            self.progress.show()
        else:
            logger.debug("Nested suite %r started", suite.name)

        self._suite_depth += 1

    def on_suite_end(self, suite: SuiteItem) -> None:
        """Print the summary when the outermost suite ends, if it is still due.

        This covers runs with no tests at all, where no test end ever arrives.
        """
        self._suite_depth -= 1
        if self._suite_depth == 0:
            self._check_complete()

    def on_test_start(self, test: TestItem) -> None:
        """Called when a test starts.

        Currently a no-op. The bar only moves when a test ends.
        """
        pass

    def on_test_end(self, test: TestItem, elapsed: float) -> None:
        """Count the test and its assertions, advance the bar, then check for completion."""
        self.state.completed_count += 1
        self.state.assertion_count += test.assertion_credit
        if self.progress is not None:
            self.progress.advance()
        self._check_complete()

    def on_outcome(
        self,
        test: TestItem,
        kind: EventKind,
        error: Union[BaseException, str, None],
    ) -> None:
        """Classify a raw outcome and record it (see on_failure)."""
        self.on_failure(test, classify(kind), error)

    def on_failure(
        self,
        test: TestItem,
        classification: Classification,
        error: Union[BaseException, str, None],
    ) -> None:
        """Record an unstable outcome, announcing failures and errors at once."""
        max_depth = self.config.max_cause_depth
        message = render_exception(error, max_depth=max_depth)
        self.state.record(
            classification.category,
            OutcomeRecord(test.name, message, classification.counts_as_error),
        )

        if classification.category in ANNOUNCED_CATEGORIES:
            details = render_exception(error, max_depth=max_depth, with_traceback=True)
            self.announce_failure(test, classification.category, details)

    def announce_failure(self, test: TestItem, category: Category, details: str) -> None:
        """Print an indented failure block between hiding and redrawing the bar.

        The block carries the full details (stack frames included), while the
        summary only lists the one-line message.
        """
        header = f"{ANNOUNCEMENT_LABELS[category]}: {test.name}"
        margin = " " * self.config.indent
        block = "\n".join(margin + line for line in details.split("\n"))

        with self.progress.suspended() if self.progress else nullcontext():
            self.console.line()
            self.console.print(Text(header, style=FAILURE_HEADER_STYLE))
            self.console.print(block, markup=False, highlight=False, soft_wrap=True)

    def _check_complete(self) -> None:
        if not self.state.is_complete or self.state.summary_printed:
            return
        self.state.summary_printed = True
        logger.debug(
            "All %d planned tests completed, printing summary",
            self.state.planned_count,
        )
        self.print_summary()

    def print_summary(self) -> None:
        if self.progress is not None:
            self.progress.hide()
        self.summary.render(self.state, self.resource_usage())
