#!/usr/bin/env python3
"""Apply schema migrations.

Usage:
    # Upgrade to the newest revision:
    DATABASE_URL=postgresql://localhost/scrabble_rs python scripts/migrate.py upgrade

    # Or inspect the database:
    python scripts/migrate.py current
    python scripts/migrate.py pending
    python scripts/migrate.py history
"""

import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from src.config import get_settings
from src.errors import StoreError

logger = logging.getLogger("migrate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the scrabble-store schema.")
    parser.add_argument("--database-url", help="defaults to DATABASE_URL")
    commands = parser.add_subparsers(dest="command", required=True)

    upgrade = commands.add_parser("upgrade", help="apply pending migrations")
    upgrade.add_argument("revision", nargs="?", default="head")
    commands.add_parser("current", help="print the applied revision")
    commands.add_parser("pending", help="list migrations not yet applied")
    commands.add_parser("history", help="list every migration in order")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log_format = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO, format=log_format)
        logger.error(f"Invalid settings: {e}")
        return 1
    logging.basicConfig(level=settings.log_level, format=log_format)

    # src.database builds its engine from settings at import time
    from src.services.migrations import MigrationRunner

    try:
        runner = MigrationRunner(args.database_url)
        if args.command == "upgrade":
            runner.upgrade(args.revision)
        elif args.command == "current":
            print(runner.current() or "<none>")
        elif args.command == "pending":
            for revision in runner.pending():
                print(revision)
        elif args.command == "history":
            for revision in runner.revisions():
                print(revision)
    except StoreError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
