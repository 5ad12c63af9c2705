#!/usr/bin/env python3
"""Run lessonmark as ``python -m lessonmark``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
