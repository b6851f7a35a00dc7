#!/usr/bin/env python3
"""Upgrade the database schema.

Usage:
    python scripts/run_migrations.py [revision]   # default: head
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(revision: str = "head") -> int:
    """Upgrade to ``revision``; failures are reported to Logfire and re-raised.

    The database URL is injected by ``migrations/env.py`` from settings.
    """
    configure_logfire(Settings())

    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "migrations"))

    with logfire.span("Running database migrations", revision=revision):
        try:
            command.upgrade(config, revision)
        except Exception:
            # The container must not start against a half-migrated schema
            logfire.exception("Database migration failed", revision=revision)
            raise
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
