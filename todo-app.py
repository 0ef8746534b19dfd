#!/usr/bin/env python3
"""
todo-app CLI

Interactive task tracker with urgency levels, sorting, filtering and
export to text, CSV or JSON. Every change is recorded in an action log.

Usage:
    ./todo-app.py                            # Start the interactive menu
    ./todo-app.py --log-file ~/todo_log.txt  # Log actions somewhere else
    ./todo-app.py --config config/config.yaml

Tasks live in memory only; use the Export menu entry to save them.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from todo_app import main

if __name__ == '__main__':
    sys.exit(main())
