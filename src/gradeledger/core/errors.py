"""
Ledger error taxonomy.

Every failure is a synchronous validation failure raised before any state
changes. Each error carries a stable ``code`` (its class name) and the HTTP
status the API layer maps it to.
"""

from __future__ import annotations

from typing import ClassVar


class LedgerError(Exception):
    """Base class for all ledger errors."""

    status_code: ClassVar[int] = 400
    default_message: ClassVar[str] = "Ledger operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Stable machine-readable error code."""
        return type(self).__name__


# ============================================================================
# Authorization errors
# ============================================================================


class AuthorizationError(LedgerError):
    """Caller is not allowed to perform the operation."""

    status_code = 403


class Unauthorized(AuthorizationError):
    default_message = "Caller is not authorized"


class CannotModifyOwner(AuthorizationError):
    default_message = "The ledger owner cannot be deauthorized"


class AlreadyAuthorized(AuthorizationError):
    status_code = 409
    default_message = "Identity is already authorized"


class NotAuthorized(AuthorizationError):
    status_code = 404
    default_message = "Identity is not authorized"


class InvalidTarget(AuthorizationError):
    status_code = 422
    default_message = "Target identity cannot be empty"


# ============================================================================
# Existence errors
# ============================================================================


class ExistenceError(LedgerError):
    """Record presence does not match what the operation requires."""


class NotFound(ExistenceError):
    status_code = 404
    default_message = "Student not found"


class AlreadyExists(ExistenceError):
    status_code = 409
    default_message = "Student already exists"


# ============================================================================
# Validation errors
# ============================================================================


class ValidationError(LedgerError):
    """Input failed validation."""

    status_code = 422
    default_message = "Invalid input"


class InvalidId(ValidationError):
    default_message = "Student ID must be positive"


class InvalidName(ValidationError):
    default_message = "Name must be 1-100 characters"


class InvalidPercentage(ValidationError):
    default_message = "Attendance percentage must be between 0 and 100"


class InvalidStudyHours(ValidationError):
    default_message = "Study hours must be between 0 and 168"


class InvalidGrade(ValidationError):
    default_message = "Grade must be between 0 and 100"


class InvalidBatchSize(ValidationError):
    default_message = "Grade batch must contain 1-50 entries"


class InvalidLimit(ValidationError):
    default_message = "Limit must be between 1 and 100"


class OffsetOutOfBounds(ValidationError):
    default_message = "Offset is beyond the end of the student list"


class NoGradesAvailable(ValidationError):
    default_message = "No grades available for prediction"
