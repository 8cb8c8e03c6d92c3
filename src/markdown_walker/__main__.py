#!/usr/bin/env python3
"""Entry point for running markdown_walker as a module.

This allows the package to be executed as:
    python -m markdown_walker [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
