"""Reporter modules for outputting test progress and results."""

from .base import Reporter
from .progressing import ProgressingReporter
from .summary import SummaryReporter, format_category

__all__ = ["Reporter", "ProgressingReporter", "SummaryReporter", "format_category"]
