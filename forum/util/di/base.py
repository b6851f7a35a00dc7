"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests may swap for an in-process double
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Common base of every provider registered in ``PROVIDERS``.

    A base without subclasses is concrete and used as is. A base that
    names a ``__mock_component__`` is implemented twice, once for
    production and once with ``__is_mock__ = True`` for tests.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
