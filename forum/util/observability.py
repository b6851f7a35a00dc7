"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Vote applied", subject_id=str(subject_id), transition="flip")

    # Manual spans for critical operations
    with logfire.span("vote_ledger.apply_vote", voter_id=str(voter_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings

SERVICE_NAME = "forum-api"
SERVICE_VERSION = "0.1.0"

# Polled by load balancers; not worth a span each
_UNTRACED_PATHS = "/health"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Output goes to Logfire cloud when ``send_to_logfire`` says so, or,
    when that is unset, whenever a token is configured. The console always
    gets a copy.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes: dict) -> dict:
    # Bodies carry user content; only validation errors are recorded
    result = {"path": request.url.path}
    if attributes.get("errors"):
        result["errors"] = attributes["errors"]
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,  # Authorization must not be recorded
        request_attributes_mapper=_request_attributes,
        excluded_urls=_UNTRACED_PATHS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
