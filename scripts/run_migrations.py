#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from blog.config import Settings
from blog.util.logging import get_logger, setup_logging
from blog.util.observability import configure_logfire

logger = get_logger("blog.migrations")


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations")
        logger.info("Upgrading schema to head (environment=%s)", settings.environment)

        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the deploy fails instead of starting with a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
