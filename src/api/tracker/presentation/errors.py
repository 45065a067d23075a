"""Translation of core errors into HTTP errors.

Every route catches what its service raises and re-raises it through
``to_http_exception`` so status codes are decided in one place.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from shared_kernel.exceptions import (
    DuplicateValueError,
    InvalidArgumentError,
    NotFoundError,
)


def to_http_exception(error: Exception, fallback_detail: str) -> HTTPException:
    """Map an exception raised by a service onto an HTTPException.

    Args:
        error: Exception raised by the service call
        fallback_detail: Detail used for unexpected errors, whose own message
            is not exposed to clients

    Returns:
        HTTPException with 400, 404, 409 or 500 status
    """
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, DuplicateValueError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=fallback_detail,
    )
