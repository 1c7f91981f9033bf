"""Classification of runner outcome events.

Each event kind maps to the category it is listed under in the summary,
plus whether it also tallies as an error. Warnings, incomplete and risky
tests are listed separately but still count against the run:

    FAILURE    -> failed
    ERROR      -> errored     (error)
    WARNING    -> warned      (error)
    SKIPPED    -> skipped
    INCOMPLETE -> incomplete  (error)
    RISKY      -> risky       (error)
"""

from progress_printer.models import Category, Classification, EventKind


class ClassificationError(Exception):
    """Raised when a runner delivers an event kind outside the known set."""

    pass


CLASSIFICATIONS = {
    EventKind.FAILURE: Classification(Category.FAILED),
    EventKind.ERROR: Classification(Category.ERRORED, counts_as_error=True),
    EventKind.WARNING: Classification(Category.WARNED, counts_as_error=True),
    EventKind.SKIPPED: Classification(Category.SKIPPED),
    EventKind.INCOMPLETE: Classification(Category.INCOMPLETE, counts_as_error=True),
    EventKind.RISKY: Classification(Category.RISKY, counts_as_error=True),
}

# Categories that interrupt the live progress display when they occur
ANNOUNCED_CATEGORIES = frozenset({Category.FAILED, Category.ERRORED})


def classify(kind: EventKind) -> Classification:
    """Classify an outcome event.

    Args:
        kind: The event kind reported by the runner

    Returns:
        The Classification for the event

    Raises:
        ClassificationError: If the kind is not an EventKind member
    """
    try:
        return CLASSIFICATIONS[kind]
    except (KeyError, TypeError) as e:
        raise ClassificationError(f"Unknown outcome event kind: {kind!r}") from e
