"""Domain-specific exceptions.

Every error carries the HTTP status the API layer should answer with, so
handlers in :mod:`app.api.errors` can render them without a lookup table.
"""

from __future__ import annotations


class ServiceError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class FetchError(ServiceError):
    """Transport-level failure talking to the upstream feed."""

    status_code = 500
    default_message = "Failed to fetch data from external API"

    def __init__(self, detail: str) -> None:
        super().__init__()
        self.detail = detail


class UpstreamError(ServiceError):
    """Upstream answered, but not with a successful result code."""

    default_message = "Error retrieving data from external API"

    def __init__(self, message: str | None = None, code: int | None = None) -> None:
        self.upstream_code = code
        status = code if code is not None and 400 <= code <= 599 else 500
        super().__init__(message, status_code=status)


class AuthenticationError(ServiceError):
    status_code = 401
    default_message = "Invalid credentials"


class InactiveAccountError(AuthenticationError):
    default_message = "Account is inactive. Please contact an administrator."


class PermissionDeniedError(ServiceError):
    status_code = 403
    default_message = "This action is unauthorized."


class UserNotFoundError(ServiceError):
    status_code = 404
    default_message = "User not found"


class DuplicateEmailError(ServiceError):
    status_code = 422
    default_message = "The email has already been taken."


__all__ = [
    "AuthenticationError",
    "DuplicateEmailError",
    "FetchError",
    "InactiveAccountError",
    "PermissionDeniedError",
    "ServiceError",
    "UpstreamError",
    "UserNotFoundError",
    "ValidationError",
]
