"""Interface layer error translation.

Domain errors carry no transport knowledge; this module maps them onto
HTTP responses in one place.
"""

from fastapi import HTTPException, status

from opaq.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTPException to raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(error, UnauthorizedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )
    if isinstance(error, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{error.resource} not found",
        )
    if isinstance(error, InvalidInputError):
        detail: str | dict[str, str] = str(error)
        if error.field:
            detail = {"message": str(error), "field": error.field}
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def internal_error() -> HTTPException:
    """Generic 500 that does not leak internals."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )
