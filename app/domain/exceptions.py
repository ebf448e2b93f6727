"""Errors raised by use cases and translated to HTTP responses by the API."""


class MissingActorError(ValueError):
    """The acting user could not be identified."""


class NotFoundError(ValueError):
    """The requested resource does not exist."""


class PermissionDeniedError(ValueError):
    """The resource exists but the actor is not allowed to touch it."""


__all__ = ["MissingActorError", "NotFoundError", "PermissionDeniedError"]
