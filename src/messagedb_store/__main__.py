"""Make package runnable with python -m messagedb_store.

This module provides the entry point for running the package as a module
(python -m messagedb_store) and for the installed console script (messagedb-store).
"""

import sys

from messagedb_store.cli import main

if __name__ == "__main__":
    sys.exit(main())
