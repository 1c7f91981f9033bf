"""Final summary of a test run.

Renders, in order:
- A separator rule and "Summary" header, when any test was unstable
- One listing per non-empty category (failed, warned, errored, skipped,
  incomplete, risky)
- A verdict banner
- Test and assertion counts
- The resource usage line
"""

from rich.console import Console
from rich.text import Text

from progress_printer.models import Category, OutcomeRecord, RunState, Verdict

DEFAULT_RULE_WIDTH = 80

VERDICT_STYLES = {
    Verdict.NO_TESTS: "black on cyan",
    Verdict.SUCCESS: "black on green",
    Verdict.OK_BUT_INCOMPLETE: "black on green",
    Verdict.FAILURES: "bold white on red",
}


def pluralize(count: int, noun: str) -> str:
    """``1 test``, ``0 tests``, ``2 tests``."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_category(label: str, records: list[OutcomeRecord]) -> str:
    """Format the listing of one category.

    Returns an empty string for an empty category, otherwise e.g.
    ``"1 failed test:\\n * T1: boom\\n"``.
    """
    if not records:
        return ""
    lines = [f"{pluralize(len(records), label + ' test')}:"]
    lines.extend(f" * {record.test_name}: {record.message}" for record in records)
    return "\n".join(lines) + "\n"


def format_counts(test_count: int, assertion_count: int) -> str:
    return f"{pluralize(test_count, 'test')}, {pluralize(assertion_count, 'assertion')}"


class SummaryReporter:
    """Prints the categorized summary once a run is complete.

    Args:
        console: Console to print on
        rule_width: Width of the separator rule above the summary
    """

    def __init__(self, console: Console, rule_width: int = DEFAULT_RULE_WIDTH):
        self.console = console
        self.rule_width = rule_width

    def _print(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def render(self, state: RunState, resource_usage: str) -> None:
        """Print the summary for a finished run.

        The caller is responsible for hiding any live progress display first.
        """
        self._print()

        if state.has_unstable_tests:
            self._print("-" * self.rule_width)
            self._print()
            self._print("Summary")
            self._print()

        for category in Category:
            self.render_category(category, state.outcomes[category])

        self.render_footer(state, resource_usage)

    def render_category(self, category: Category, records: list[OutcomeRecord]) -> None:
        listing = format_category(category.value, records)
        if not listing:
            return
        for line in listing.splitlines():
            self._print(line)
        self._print()

    def render_footer(self, state: RunState, resource_usage: str) -> None:
        verdict = state.verdict()
        self._print()
        self.console.print(Text(f" {verdict.value} ", style=VERDICT_STYLES[verdict]))
        self._print(format_counts(state.completed_count, state.assertion_count))
        self._print(resource_usage)
