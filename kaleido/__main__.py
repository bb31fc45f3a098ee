"""
Entry point for running kaleido as a module.

Usage:
    python -m kaleido parse program.ks
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
