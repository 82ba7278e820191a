"""
Main entry point for the tsb_homebank package.

Allows running the client as: python -m tsb_homebank
"""

import sys

from tsb_homebank.cli import main

if __name__ == "__main__":
    sys.exit(main())
