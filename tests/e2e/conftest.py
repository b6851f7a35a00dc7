"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from forum.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by a fresh in-memory container."""
    app_instance = create_app(container=build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client
