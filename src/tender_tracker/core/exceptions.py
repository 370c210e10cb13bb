from __future__ import annotations

from typing import Any, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` holds one ``{"field": ..., "message": ...}`` entry per offending
    field when the failure comes from schema validation.
    """

    def __init__(self, message: str = "Validation error", errors: Optional[Sequence[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else None


class ConflictError(DomainError):
    """Raised when a unique key (username, tender number) already exists."""


class AuthenticationError(DomainError):
    """Raised when there is no valid session or login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a record with the given identifier does not exist."""

    status_code = 404


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""
