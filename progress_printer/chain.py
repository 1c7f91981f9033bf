"""Rendering of exceptions together with the exceptions that caused them."""

import traceback
from typing import Iterator, Optional, Union

# Upper bound on the number of chained exceptions walked for one failure
DEFAULT_MAX_DEPTH = 32

CAUSED_BY = "Caused by "


def _previous(error: BaseException) -> Optional[BaseException]:
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def iter_exception_chain(
    error: BaseException,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Iterator[BaseException]:
    """Yield an exception followed by each of its predecessors.

    Explicit causes (``raise ... from``) take priority over the implicit
    context. Iteration stops when no further cause exists, when an
    exception is seen a second time, or after ``max_depth`` exceptions.
    """
    seen: set[int] = set()
    current: Optional[BaseException] = error
    while current is not None and len(seen) < max_depth:
        if id(current) in seen:
            return
        seen.add(id(current))
        yield current
        current = _previous(current)


def describe_exception(error: BaseException) -> str:
    """Single exception as ``Type: message``, without traceback."""
    return "".join(traceback.format_exception_only(type(error), error)).rstrip("\n")


def describe_with_traceback(error: BaseException) -> str:
    """``Type: message`` followed by the stack frames the exception passed through."""
    frames = "".join(traceback.format_tb(error.__traceback__))
    return (describe_exception(error) + "\n" + frames).rstrip("\n")


def render_exception(
    error: Union[BaseException, str, None],
    max_depth: int = DEFAULT_MAX_DEPTH,
    with_traceback: bool = False,
) -> str:
    """Render an outcome payload, one entry per chained exception.

    Each entry is a single ``Type: message`` line, or with
    ``with_traceback`` that line followed by its stack frames. Entries after
    the first are prefixed with ``Caused by``. Strings (skip reasons and the
    like) are returned unchanged.
    """
    if error is None:
        return ""
    if isinstance(error, str):
        return error

    describe = describe_with_traceback if with_traceback else describe_exception
    lines = []
    for index, link in enumerate(iter_exception_chain(error, max_depth)):
        text = describe(link)
        lines.append(text if index == 0 else CAUSED_BY + text)
    return "\n".join(lines)
