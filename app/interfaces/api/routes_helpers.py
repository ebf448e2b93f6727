"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.domain.exceptions import MissingActorError, NotFoundError, PermissionDeniedError


def http_error_from(exc: ValueError) -> HTTPException:
    """Translate a use case error into the matching HTTP error."""

    detail = str(exc)
    if isinstance(exc, MissingActorError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
