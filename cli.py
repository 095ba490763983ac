#!/usr/bin/env python3
"""
GitHub Activity CLI.

Entry script for running from a source checkout without installing.

Usage:
    python cli.py --help
    python cli.py torvalds
    python cli.py torvalds --type=WatchEvent --limit=3
    python cli.py torvalds --json
    python cli.py torvalds --verbose
"""

import sys
from pathlib import Path

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from github_activity.cli.main import main

if __name__ == "__main__":
    main()
