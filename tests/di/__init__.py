"""Test doubles for the DI container.

Importing this package registers the mock providers, which
``mockable_components`` discovers through subclassing.
"""

from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = ["MockPersistenceProvider", "build_test_container"]
