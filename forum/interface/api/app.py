"""FastAPI application factory."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.routes import (
    comments,
    communities,
    health,
    notifications,
    posts,
    users,
    votes,
)
from forum.interface.error import register_error_handlers
from forum.util.di.container import create_container, setup_di
from forum.util.logging import setup_logging
from forum.util.observability import instrument_fastapi

ROUTERS = (
    health.router,
    posts.router,
    comments.router,
    votes.router,
    notifications.router,
    users.router,
    communities.router,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the API application.

    Logfire should be configured before calling this; ``start_app.py``
    does it in production. Served by uvicorn in factory mode.

    Args:
        container: DI container to use instead of the production one (tests)
    """
    settings = Settings()
    setup_logging(settings)

    app = FastAPI(
        title="Forum API",
        description="Community forum: posts, threaded comments, votes and live notifications",
        version="0.1.0",
    )
    instrument_fastapi(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,  # auth_token cookie
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Last-Event-ID"],
        max_age=600,
    )

    setup_di(app, container or create_container())
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)

    return app
