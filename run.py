#!/usr/bin/env python3
"""
Progress Printer

Run unittest tests with a live progress bar and a categorized summary.

Usage:
    python run.py                          # Discover tests under .
    python run.py -s tests -p "*_test.py"  # Custom discovery
    python run.py pkg.tests.test_module    # Run specific tests
    python run.py -f                       # Stop at the first failure
    python run.py -c printer.json          # Custom display settings
    python run.py --debug                  # Log reporter internals
"""

import sys
from progress_printer.cli import main

if __name__ == "__main__":
    sys.exit(main())
