class DomainError(Exception):
    """Base exception for caller contract violations.

    Business rule conflicts are never raised; they are returned as data
    (see `conflicts.model.Conflict`).
    """


class ValidationError(DomainError):
    """Raised when input data is malformed or references unknown records."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
