#!/usr/bin/env python3
"""
imgrename - Main Entry

Usage:
    python main.py                          # GUI mode (default)
    python main.py gui                      # GUI mode
    python main.py rule add "_final" ""     # Add a rename rule
    python main.py input add ./photos       # Add an input directory
    python main.py preview                  # Show output names and statuses
    python main.py apply --dry-run          # Show what would be written
"""

import sys

from imgrename.cli import main


if __name__ == "__main__":
    sys.exit(main())
