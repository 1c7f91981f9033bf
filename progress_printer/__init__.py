"""
Progress Printer.

A test reporter that keeps a single live progress bar on the terminal,
announces failures as they happen without tearing the bar, and prints a
categorized summary once every planned test has finished.
"""

__version__ = "1.0.0"

from progress_printer.cli import main

__all__ = ["main", "__version__"]
