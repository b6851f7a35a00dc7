#!/usr/bin/env python3
"""Entry point of the API container.

Logfire is configured before uvicorn builds the app, so failures while
wiring the container are reported too.
"""

import sys

import logfire
import uvicorn

from forum.config import Settings
from forum.util.observability import configure_logfire

APP_FACTORY = "forum.interface.api.app:create_app"


def main() -> int:
    """Serve the API until uvicorn exits."""
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting forum API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
    )
    try:
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )
    except Exception:
        logfire.exception("Forum API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
