#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play [--starting-player red|yellow] [--ascii]
    python run.py position --position 0,0,1,...
    python run.py benchmark [--iterations N]
    python run.py --debug play
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect_four.interfaces.cli import SimpleCLI


def main():
    cli = SimpleCLI()
    try:
        return cli.run(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nGame interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
