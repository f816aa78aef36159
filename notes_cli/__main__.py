"""
Module execution entry point.

Allows running with: python -m notes_cli
"""

import sys
from notes_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
