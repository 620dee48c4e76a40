"""Typed exception hierarchy for the response builder.

Raise these instead of bare HTTPException so that:
- Service code is testable without a FastAPI request context
- HTTP status codes are declared in one place
- the registered exception handlers convert them to consistent JSON envelopes
"""

from __future__ import annotations


class AppError(Exception):
    """Base application error. Carries an HTTP status like Starlette's HTTPException."""

    status_code: int = 500
    detail: str = ""

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None) -> None:
        self.detail = detail if detail is not None else self.__class__.detail
        self.headers = headers
        super().__init__(self.detail)


class HttpError(AppError):
    """Generic HTTP error. Status can be given per instance."""

    status_code = 400

    def __init__(
        self,
        status_code: int | None = None,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail, headers)


class NotFoundError(HttpError):
    """Resource or route does not exist."""

    status_code = 404


class ServiceUnavailableError(HttpError):
    """Service is in maintenance or a dependency is down."""

    status_code = 503


class UnauthorizedError(HttpError):
    """Request lacks valid credentials."""

    status_code = 401


class ForbiddenError(HttpError):
    """Authenticated user is not allowed to perform this action."""

    status_code = 403


class UnprocessableError(HttpError):
    """Request body is structurally valid but semantically incorrect."""

    status_code = 422


class ValidationFailed(AppError):
    """Field-level validation failed.

    ``errors`` maps a field name to the list of messages for that field.
    """

    status_code = 400

    def __init__(self, errors: dict[str, list[str]], detail: str | None = None) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(detail)


class AuthenticationError(AppError):
    """Raised by the auth layer: token missing, expired, or invalid."""

    status_code = 401

    def __init__(self, detail: str | None = None, guards: list[str] | None = None) -> None:
        self.guards = guards or []
        super().__init__(detail)


class ResponseBuilderError(Exception):
    """Response builder was called with arguments it cannot turn into an error response."""
