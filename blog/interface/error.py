"""Mapping of domain errors to HTTP responses."""

import logfire
import pydantic
from fastapi import HTTPException, status

from blog.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Convert an exception raised by a use case to an HTTPException.

    Business errors keep their message. Store and unexpected failures are
    logged and reported with a generic message.

    Args:
        error: Exception raised while handling the request
        action: Short description of the request, e.g. "delete comment"

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {error.action} this {error.resource}",
        )
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )
    if isinstance(error, pydantic.ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[
                {"loc": list(e["loc"]), "msg": e["msg"]} for e in error.errors()
            ],
        )
    if isinstance(error, StoreUnavailableError):
        logfire.error(
            f"Store unavailable during {action}",
            operation=error.operation,
            error=str(error),
        )
    else:
        logfire.error(
            f"Unexpected error during {action}",
            error=str(error),
            error_type=type(error).__name__,
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
