"""
Main entry point for the command-line tools.

Usage:
    python -m chess_capture --help
"""

import sys

from chess_capture.cli import main

if __name__ == "__main__":
    sys.exit(main())
