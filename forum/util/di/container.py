"""Dependency injection container."""

from collections.abc import Iterable

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from forum.util.di import Component, select_providers


def create_container(mocked: Iterable[Component] = ()) -> AsyncContainer:
    """Build the application container.

    Settings are loaded from environment variables by the config provider.

    Args:
        mocked: Components to replace with their mocks (tests only)

    Returns:
        Container that also serves FastAPI requests
    """
    return make_async_container(*select_providers(mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app and close it on shutdown."""
    setup_dishka(container, app)
