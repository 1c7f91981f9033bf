import sys

from progress_printer.cli import main

sys.exit(main())
