"""HTTP error mapping.

Domain errors propagate out of use cases unchanged; these handlers turn
them into JSON responses with a ``detail`` message.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import (
    ConflictingWriteError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
    ValidationError,
)

# Most specific first; the first matching entry wins
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictingWriteError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error (400 when unmapped)."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error."""
    code = status_for(exc)  # type: ignore[arg-type]
    if code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, error=str(exc), status=code
        )
    else:
        logfire.warn(
            "Request rejected", path=request.url.path, error=str(exc), status=code
        )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a failed use case request construction (e.g. a bad community name)."""
    errors = exc.errors(include_url=False, include_context=False)  # type: ignore[attr-defined]
    logfire.warn("Invalid request", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": [{"loc": e["loc"], "msg": e["msg"]} for e in errors]},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on the app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(PydanticValidationError, handle_validation_error)
