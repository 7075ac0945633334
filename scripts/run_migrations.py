#!/usr/bin/env python3
"""Apply OPAQ database migrations, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from opaq.config import Settings
from opaq.util.logging import setup_logging
from opaq.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database to the latest revision."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", environment=settings.environment):
        try:
            # alembic.ini sits at the repository root; env.py reads the URL
            # from Settings, so DATABASE__URL applies here too
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the container rather than serve against a broken schema
            raise

    logfire.info("Database is at head revision")
    return 0


if __name__ == "__main__":
    sys.exit(main())
