"""Wall time and peak memory of the current process, for the summary footer."""

import sys
import time
from typing import Callable, Optional

from rich import filesize


def format_duration(seconds: float) -> str:
    """Format a duration as MM:SS.mmm (HH:MM:SS.mmm past an hour)."""
    millis = int(round(max(seconds, 0.0) * 1000))
    hours, rest = divmod(millis, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"
    return f"{minutes:02d}:{secs:02d}.{millis:03d}"


def peak_memory_bytes() -> Optional[int]:
    """Peak resident set size of this process, or None where unavailable."""
    if sys.platform == "win32":
        return None

    import resource

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is reported in bytes on macOS and in kilobytes elsewhere
    if sys.platform == "darwin":
        return peak
    return peak * 1024


class ResourceTimer:
    """Measures elapsed wall time from construction.

    Args:
        clock: Source of monotonic time
        memory: Callable returning peak memory in bytes (or None)
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        memory: Callable[[], Optional[int]] = peak_memory_bytes,
    ):
        self.clock = clock
        self.memory = memory
        self.started_at = clock()

    def elapsed(self) -> float:
        return self.clock() - self.started_at

    def resource_usage(self) -> str:
        """Summary line, e.g. ``Time: 00:01.234, Memory: 12.3 MB``."""
        usage = f"Time: {format_duration(self.elapsed())}"
        peak = self.memory()
        if peak is not None:
            usage += f", Memory: {filesize.decimal(peak)}"
        return usage
