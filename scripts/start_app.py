#!/usr/bin/env python3
"""Serve the OPAQ API under uvicorn with startup errors reported to Logfire."""

import sys

import logfire
import uvicorn

from opaq.config import Settings
from opaq.util.logging import setup_logging
from opaq.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Logfire must be configured before opaq.interface.api.app is imported
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting OPAQ API",
        environment=settings.environment,
        port=settings.port,
        git_sha=settings.git_sha,
    )

    try:
        uvicorn.run(
            "opaq.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
