"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError):
    """A component cannot be served by the requested implementation.

    Attributes:
        components: Names of the offending components
    """

    def __init__(self, message: str, components: set[str] | None = None) -> None:
        super().__init__(message)
        self.components = components or set()
