"""
Student Models

Student records, their derived performance metrics and the registration
enumeration used for pagination.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Index, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CreatedAtMixin, utcnow


class Student(Base, CreatedAtMixin):
    """A tracked student.

    The primary key is the caller-supplied identifier, not a generated one.
    Deactivated rows stay in the table and are overwritten on re-registration.
    """

    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("id > 0", name="check_student_id_positive"),
        CheckConstraint(
            "attendance_percentage BETWEEN 0 AND 100", name="check_attendance_range"
        ),
        CheckConstraint("study_hours BETWEEN 0 AND 168", name="check_study_hours_range"),
        CheckConstraint("predicted_score BETWEEN 0 AND 100", name="check_predicted_score_range"),
        Index("idx_students_active", "is_active"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False, comment="Student identifier (> 0)"
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Append-only grade history, in insertion order
    grades: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)

    attendance_percentage: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    study_hours: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, comment="Hours per week (0-168)"
    )
    predicted_score: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, comment="Only changed by an explicit prediction"
    )

    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    registered_by: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Identity of the registering caller"
    )


class PerformanceMetrics(Base):
    """Derived metrics for a student.

    Created lazily on the first grade addition or prediction and never
    deleted. Left stale when the student is deactivated.
    """

    __tablename__ = "performance_metrics"
    __table_args__ = (
        CheckConstraint(
            "category IS NULL OR category IN ('Excellent', 'Good', 'Average', 'NeedsImprovement')",
            name="check_category",
        ),
        CheckConstraint("improvement_rate BETWEEN 0 AND 100", name="check_improvement_rate"),
    )

    student_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    average_grade: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    improvement_rate: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    category: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment="NULL until the first prediction"
    )
    confidence_score: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class StudentEnumeration(Base):
    """Append-only log of every successful registration.

    Defines pagination order. Re-registering a deactivated identifier adds
    another row.
    """

    __tablename__ = "student_enumeration"

    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False)
