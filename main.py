#!/usr/bin/env python3
"""
Pie Chart View - Main Entry Point

Runs the command line interface from a source checkout; see
``piechart.cli`` for the options.

Usage:
    python main.py --segment Rent=950 --segment Food=420 --segment Fun=130
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from piechart.cli import main

if __name__ == "__main__":
    main()
