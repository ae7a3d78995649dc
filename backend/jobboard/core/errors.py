# jobboard/core/errors.py
"""
Application error kinds.

Services raise these; the handlers registered in ``jobboard.main`` are the only
place they are turned into HTTP responses. Keep FastAPI out of this module so
services stay framework-agnostic.
"""
from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Record rejected by the store: malformed fields, duplicate email, password mismatch."""

    status_code = 400


class BadRequestError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class InvalidTokenError(AuthenticationError):
    """Session token failed signature, expiry or shape checks."""


class InvalidOrExpiredTokenError(AppError):
    """Password reset token unknown or past its expiry. Both cases look the same."""

    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class BusinessRuleError(AppError):
    status_code = 400


class ServerError(AppError):
    status_code = 500
