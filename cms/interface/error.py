"""Interface layer errors.

Domain errors are translated to HTTP responses here and nowhere else.
"""

from fastapi import HTTPException, status

from cms.domain.error import (
    AuthenticationError,
    ConcurrencyConflictError,
    ConflictError,
    DomainError,
    InvalidMergeError,
    NotAuthorizedError,
    NotFoundError,
    ResourceInUseError,
    SlugExhaustedError,
    ValidationError,
)

# Checked in order; the first matching class wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ResourceInUseError, status.HTTP_400_BAD_REQUEST),
    (InvalidMergeError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ConcurrencyConflictError, status.HTTP_409_CONFLICT),
    (SlugExhaustedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error (500 if unmapped)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def http_error(error: DomainError) -> HTTPException:
    """Build the HTTPException a route raises for a domain error.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the mapped status and the error message
    """
    headers = None
    status_code = status_for(error)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=status_code, detail=str(error), headers=headers)
