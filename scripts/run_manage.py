#!/usr/bin/env python
"""
Helper script to run Django management commands with .env values taking
precedence over the shell environment.

A stale TRENDS_LIVE_PROVIDERS_ENABLED export in your shell would otherwise
silently decide whether live providers are called.

Usage:
    python scripts/run_manage.py <command> [args...]

Examples:
    python scripts/run_manage.py check
    python scripts/run_manage.py trends_scan openai rust --period 1d
    python scripts/run_manage.py trends_cache stats
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure we're in the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
os.chdir(PROJECT_ROOT)
sys.path.insert(0, str(PROJECT_ROOT))


def main():
    env_path = PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "viralboard.settings")

    from django.core.management import execute_from_command_line

    # Build argv: ['manage.py', <command>, <args>...]
    argv = ["manage.py"] + sys.argv[1:]
    execute_from_command_line(argv)


if __name__ == "__main__":
    main()
