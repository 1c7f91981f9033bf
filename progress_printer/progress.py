"""Single-line progress bar that shares the terminal with other output.

The bar is drawn without a trailing newline so it can be overwritten in
place. Anything else written to the console while the bar is visible
must be wrapped in ``hide()``/``show()`` (or ``suspended()``), otherwise
the text lands on the bar's line and both get garbled.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

DEFAULT_BAR_WIDTH = 80

BAR_CHAR = "="
PROGRESS_CHAR = ">"
EMPTY_BAR_CHAR = "-"

# Carriage return followed by "erase entire line"
ERASE_LINE = Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2))


def format_elapsed(seconds: float) -> str:
    """Format a duration as MM:SS."""
    minutes, secs = divmod(int(max(seconds, 0)), 60)
    return f"{minutes:02d}:{secs:02d}"


class ProgressDisplay:
    """Live progress bar bound to a fixed number of tests.

    Args:
        console: Console the bar is drawn on
        total: Number of steps the bar represents
        bar_width: Maximum width of the bar itself, in columns
        clock: Source of monotonic time, used for the elapsed column
    """

    def __init__(
        self,
        console: Console,
        total: int,
        bar_width: int = DEFAULT_BAR_WIDTH,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.console = console
        self.total = max(total, 0)
        self.bar_width = bar_width
        self.clock = clock
        self.position = 0
        self.visible = False
        # Only true once something was actually written (terminal consoles)
        self.drawn = False
        self._started_at = clock()

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 0.0
        return self.position / self.total

    def _bar(self, width: int) -> str:
        complete = int(self.fraction * width)
        bar = BAR_CHAR * complete
        if complete < width:
            bar += PROGRESS_CHAR + EMPTY_BAR_CHAR * (width - complete - 1)
        return bar

    def render(self) -> Text:
        """Render the bar at its current position as a single line."""
        digits = len(str(self.total))
        counter = f" {self.position:>{digits}}/{self.total} ["
        tail = f"] {int(self.fraction * 100):>3}% {format_elapsed(self.clock() - self._started_at)}"

        # Keep the whole line narrower than the terminal so it never wraps
        room = self.console.width - len(counter) - len(tail) - 1
        width = max(1, min(self.bar_width, room))

        return Text.assemble(counter, (self._bar(width), "green"), tail)

    def _draw(self) -> None:
        if not self.console.is_terminal:
            return
        if self.drawn:
            self.console.control(ERASE_LINE)
        self.console.print(self.render(), end="", soft_wrap=True, highlight=False)
        self.drawn = True

    def show(self) -> None:
        """Draw the bar at its current position, replacing any previous drawing."""
        self._draw()
        self.visible = True

    def hide(self) -> None:
        """Erase the bar and move to a fresh line for other output."""
        if not self.visible:
            return
        if self.drawn:
            self.console.control(ERASE_LINE)
            self.console.line()
            self.drawn = False
        self.visible = False

    def advance(self, step: int = 1) -> None:
        """Move the bar forward and redraw it in place."""
        self.position = min(self.position + step, self.total)
        self.show()

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Hide the bar for the duration of the block, then redraw it."""
        was_visible = self.visible
        self.hide()
        try:
            yield
        finally:
            if was_visible:
                self.show()
