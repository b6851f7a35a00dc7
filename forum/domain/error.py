"""Domain layer errors.

Store-facing failures are converted into this taxonomy at the domain
service boundary; raw backend errors never reach callers.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SubjectNotFoundError(NotFoundError):
    """Raised when a vote targets a post or comment that no longer exists."""

    pass


class UnauthenticatedError(DomainError):
    """Raised when a mutating action is attempted without a signed-in user."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a resource they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class StoreUnavailableError(DomainError):
    """Transient store or network failure. Safe to retry."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        detail = f": {cause}" if cause else ""
        super().__init__(f"Store unavailable during {operation}{detail}")


class ConflictingWriteError(DomainError):
    """Another write invalidated this operation's precondition.

    Callers should re-run the full read-decide-write sequence once.
    """

    def __init__(self, message: str = "Conflicting write, please try again"):
        super().__init__(message)
