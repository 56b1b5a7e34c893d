#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Examples:
    # Play against the random opponent
    python run.py play

    # Play against the search opponent, looking 5 plies ahead
    python run.py play --opponent search --depth 5

    # Pit the search opponent against the random one for 50 games
    python run.py simulate --first search --second random --games 50

    # Benchmark with 5000 iterations and debug logging
    python run.py --debug benchmark --iterations 5000
"""

import sys

from c4engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
