#!/usr/bin/env python
"""
Helper script to run manage.py commands from anywhere in the repo.

Usage:
    python scripts/run_manage.py <command> [args...]

Examples:
    python scripts/run_manage.py check
    python scripts/run_manage.py runserver
    python scripts/run_manage.py resolve_actor_schema "apify~web-scraper" --trace
"""

import os
import sys
from pathlib import Path

# Ensure we're in the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
os.chdir(PROJECT_ROOT)
sys.path.insert(0, str(PROJECT_ROOT))


def main():
    # Set Django settings module
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "actorschema.settings")

    # Import and run Django's management command
    from django.core.management import execute_from_command_line

    # Build argv: ['manage.py', <command>, <args>...]
    argv = ["manage.py"] + sys.argv[1:]
    execute_from_command_line(argv)


if __name__ == "__main__":
    main()
