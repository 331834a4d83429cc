#!/usr/bin/env python3
"""Start the Genie API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from genie.config import Settings
from genie.util.logging import setup_logging
from genie.util.observability import configure_logfire


def main() -> int:
    """Start the API server and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire before the app module is imported
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Genie API",
            environment=settings.environment,
            base_url=settings.api.base_url,
        )
        uvicorn.run(
            "genie.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
