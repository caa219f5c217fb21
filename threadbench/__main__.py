#!/usr/bin/env python3
"""
Entry point for running threadbench as a module.

Usage:
    python -m threadbench           # Default sweep, one to ten threads
    python -m threadbench 2-6       # Sweep from two to six threads
    python -m threadbench --help    # Show help
"""

import sys

from threadbench.cli import main

if __name__ == "__main__":
    sys.exit(main())
