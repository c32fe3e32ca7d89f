from __future__ import annotations

from typing import Optional

from .enums import ErrorCode


class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries an ``ErrorCode`` and the HTTP status the boundary
    layer should answer with.
    """

    http_status = 400
    default_code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code.value}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class BusinessRuleViolation(DomainError):
    """Raised when a state-machine guard fails (double check-in, overlap...)."""

    http_status = 409


class AuthorizationError(DomainError):
    """Raised when a user lacks permission, or the network check fails."""

    http_status = 403
    default_code = ErrorCode.FORBIDDEN


class NotFoundError(DomainError):
    http_status = 404
    default_code = ErrorCode.NOT_FOUND


class PersistenceError(DomainError):
    """Raised when the storage layer fails."""

    http_status = 500
    default_code = ErrorCode.PERSISTENCE
