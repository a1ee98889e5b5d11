#!/usr/bin/env python3
"""
run.py - Main entry point for connectk
"""

import sys

from connectk.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
