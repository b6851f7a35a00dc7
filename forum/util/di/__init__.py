"""Dependency injection: provider registry and selection."""

from collections.abc import Iterable
from typing import Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    PushChannelProvider,
)
from forum.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PushChannelProvider,
    # Mockable
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Components with a registered mock implementation.

    Mocks live with the tests, so this is empty unless they were imported.
    """
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__
        and any(sub.__is_mock__ for sub in base.__subclasses__())
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of one provider base.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If the requested implementation is missing
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    impl = next((c for c in subclasses if c.__is_mock__ == use_mock), None)
    if impl is None:
        kind = "mock" if use_mock else "production"
        component = base.__mock_component__ or base.__name__
        raise DependencyInjectionError(
            f"No {kind} implementation for {component}", {component}
        )
    return impl


def select_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per registered base.

    Args:
        mocked: Components to serve from their mock implementation

    Returns:
        Provider instances for ``make_async_container``
    """
    mocked = set(mocked)
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PushChannelProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
