#!/usr/bin/env python3
"""
run.py - Main entry point for terminal Connect Four
"""

import sys

from c4term.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
