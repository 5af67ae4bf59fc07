"""Maps domain exceptions to HTTP errors for the v1 endpoints."""

from fastapi import HTTPException, status

from inkwell.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidUploadError,
    PermissionDeniedError,
    PersistenceError,
)

DOMAIN_ERRORS = (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidUploadError,
    PermissionDeniedError,
    PersistenceError,
    ValueError,
)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (InvalidUploadError, status.HTTP_400_BAD_REQUEST),
    (PersistenceError, status.HTTP_502_BAD_GATEWAY),
    (ValueError, status.HTTP_400_BAD_REQUEST),
]


def to_http_exception(error: Exception) -> HTTPException:
    """Build the HTTPException matching a domain error (500 for anything unknown)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
