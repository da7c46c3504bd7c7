"""
Student Schemas

Pydantic models for API request bodies and the read-only snapshots the
ledger hands out. Range checks live in the ledger so that every caller gets
the same error codes; request models only enforce shape.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gradeledger.core.categories import Category


# Snapshots
class StudentSnapshot(BaseModel):
    """Copy of a student record. Never aliases ledger state."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    grades: tuple[int, ...]
    attendance_percentage: int
    study_hours: int
    predicted_score: int
    is_active: bool
    registered_by: str
    created_at: datetime


class MetricsSnapshot(BaseModel):
    """Copy of a student's derived metrics.

    All zero with no category when nothing has been computed yet.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    student_id: int
    average_grade: int = 0
    improvement_rate: int = 0
    category: Category | None = None
    confidence_score: int = 0
    last_updated: datetime | None = None


class PredictionResult(BaseModel):
    """Outcome of an explicit prediction request."""

    model_config = ConfigDict(frozen=True)

    student_id: int
    predicted_score: int
    category: Category
    confidence_score: int
    metrics: MetricsSnapshot


class StudentIdPage(BaseModel):
    """A window over the registration enumeration."""

    offset: int
    limit: int
    total: int
    ids: list[int]


class StudentCount(BaseModel):
    """Total registrations ever made, deactivated students included."""

    count: int


class CategoryLabel(BaseModel):
    category: str
    label: str


class LedgerEventSchema(BaseModel):
    """Audit event as exposed to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    operation: str
    student_id: int | None
    actor: str
    details: dict[str, Any]
    occurred_at: datetime


# Requests
class StudentCreate(BaseModel):
    """Schema for registering a student."""

    id: int = Field(..., description="Student identifier (> 0)")
    name: str = Field(..., description="1-100 characters")
    attendance_percentage: int = Field(..., description="0-100")
    study_hours: int = Field(..., description="Weekly study hours, 0-168")


class GradeSubmit(BaseModel):
    """One grade or a batch of grades; exactly one must be given."""

    grade: int | None = None
    grades: list[int] | None = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "GradeSubmit":
        if (self.grade is None) == (self.grades is None):
            raise ValueError("Provide exactly one of 'grade' or 'grades'")
        return self


class AttendanceUpdate(BaseModel):
    attendance_percentage: int


class StudyHoursUpdate(BaseModel):
    study_hours: int
