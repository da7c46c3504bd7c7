"""Pydantic schemas for API validation and ledger snapshots."""

from .authorization import AuthorizationRequest, AuthorizationStatus
from .students import (
    AttendanceUpdate,
    CategoryLabel,
    GradeSubmit,
    LedgerEventSchema,
    MetricsSnapshot,
    PredictionResult,
    StudentCount,
    StudentCreate,
    StudentIdPage,
    StudentSnapshot,
    StudyHoursUpdate,
)

__all__ = [
    # Authorization
    "AuthorizationRequest",
    "AuthorizationStatus",
    # Students
    "StudentSnapshot",
    "MetricsSnapshot",
    "PredictionResult",
    "StudentIdPage",
    "StudentCount",
    "CategoryLabel",
    "LedgerEventSchema",
    "StudentCreate",
    "GradeSubmit",
    "AttendanceUpdate",
    "StudyHoursUpdate",
]
