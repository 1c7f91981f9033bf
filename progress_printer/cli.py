"""Command-line interface for the progressing test reporter.

Discovers (or loads by name) unittest tests and runs them with a live
progress bar and a categorized summary.
"""

import argparse
import logging
import sys
import unittest
from dataclasses import replace
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from progress_printer.config import ConfigError, ReporterConfig, load_config
from progress_printer.models import Verdict
from progress_printer.reporters import ProgressingReporter
from progress_printer.runner import ProgressTestRunner


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="progress-printer",
        description="Run unittest tests with a live progress bar and summary",
    )

    parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Test modules, classes or methods to run (default: discover)",
    )

    parser.add_argument(
        "-s", "--start-directory",
        default=".",
        help="Directory to start discovery from (default: .)",
    )

    parser.add_argument(
        "-p", "--pattern",
        default="test*.py",
        help="Pattern to match test files (default: test*.py)",
    )

    parser.add_argument(
        "-t", "--top-level-directory",
        default=None,
        help="Top level directory of the project (default: start directory)",
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to a JSON settings file",
    )

    parser.add_argument(
        "-f", "--failfast",
        action="store_true",
        help="Stop on the first failure or error",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log reporter internals to stderr",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    """Send package logs to stderr through Rich when debugging."""
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def load_tests(args: argparse.Namespace) -> unittest.TestSuite:
    """Load the tests named on the command line, or discover them."""
    loader = unittest.TestLoader()
    if args.names:
        return loader.loadTestsFromNames(args.names)
    return loader.discover(args.start_directory, args.pattern, args.top_level_directory)


def create_reporter(config: ReporterConfig) -> ProgressingReporter:
    """Create the console reporter for a run."""
    console = Console(legacy_windows=True, no_color=not config.color)
    return ProgressingReporter(console=console, config=config)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 for success, 1 for test failures, 2 for errors
    """
    args = parse_args(argv)
    setup_logging(args.debug)

    # Load configuration
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.no_color:
        config = replace(config, color=False)

    # Load tests
    try:
        suite = load_tests(args)
    except ImportError as e:
        print(f"Test loading error: {e}", file=sys.stderr)
        return 2

    # Run tests
    reporter = create_reporter(config)
    ProgressTestRunner(reporter, failfast=args.failfast).run(suite)

    # Return appropriate exit code
    return 1 if reporter.state.verdict() == Verdict.FAILURES else 0


if __name__ == "__main__":
    sys.exit(main())
