"""Base reporter interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from progress_printer.models import EventKind, SuiteItem, TestItem


class Reporter(ABC):
    """Abstract base class for receivers of test-run lifecycle events.

    A runner calls these in a fixed order: suite starts may nest, every
    test gets exactly one ``on_test_start`` and one ``on_test_end``, and
    any outcome event for a test arrives before its ``on_test_end``.
    """

    @abstractmethod
    def on_suite_start(self, suite: "SuiteItem") -> None:
        """Called when a suite (root or nested) starts."""
        pass

    @abstractmethod
    def on_suite_end(self, suite: "SuiteItem") -> None:
        """Called when a suite (root or nested) ends."""
        pass

    @abstractmethod
    def on_test_start(self, test: "TestItem") -> None:
        """Called when a test starts."""
        pass

    @abstractmethod
    def on_test_end(self, test: "TestItem", elapsed: float) -> None:
        """Called when a test ends, whatever its outcome."""
        pass

    @abstractmethod
    def on_outcome(
        self,
        test: "TestItem",
        kind: "EventKind",
        error: Union[BaseException, str, None],
    ) -> None:
        """Called when a test fails, errors, warns, skips, or is incomplete or risky."""
        pass
