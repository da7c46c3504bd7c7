"""
Student Record Store

Owns the student lifecycle: registration, grade appends, attendance and
study-hour updates, deactivation and persisting predictions.

Derived state is refreshed asymmetrically:
- grade additions refresh average grade and improvement rate only
- attendance and study-hour updates refresh nothing
- only ``predict`` refreshes the predicted score, category and confidence
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from gradeledger.core.errors import AlreadyExists, NotFound
from gradeledger.core.models import PerformanceMetrics, Student, StudentEnumeration, utcnow
from gradeledger.core.validation import (
    MAX_STUDENT_ID,
    validate_attendance,
    validate_grade,
    validate_grade_batch,
    validate_student_id,
    validate_student_name,
    validate_study_hours,
)
from gradeledger.ledger import events, metrics

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from gradeledger.ledger.authorization import AuthorizationRegistry
    from gradeledger.ledger.events import EventRecorder

logger = logging.getLogger(__name__)


async def load_active_student(db: AsyncSession, student_id: int) -> Student:
    """Fetch an active student.

    Raises:
        NotFound: If the student was never registered or is deactivated
    """
    in_range = isinstance(student_id, int) and 0 < student_id <= MAX_STUDENT_ID
    student = await db.get(Student, student_id) if in_range else None
    if student is None or not student.is_active:
        raise NotFound(f"Student not found with ID: {student_id}")
    return student


class StudentRecordStore:
    """Mutating operations on student records.

    Every public method checks authorization first, then existence, then
    input, and only then touches state. The caller owns the transaction.
    """

    def __init__(
        self,
        db: AsyncSession,
        *,
        registry: AuthorizationRegistry,
        recorder: EventRecorder,
    ):
        """Initialize record store.

        Args:
            db: Database session
            registry: Authorization guard for the same session
            recorder: Audit event recorder for the same session
        """
        self.db = db
        self.registry = registry
        self.recorder = recorder

    # ========================================================================
    # Lifecycle
    # ========================================================================

    async def register(
        self,
        caller: str,
        student_id: int,
        name: str,
        attendance: int,
        study_hours: int,
    ) -> Student:
        """Register a student, or re-register a deactivated one.

        Raises:
            Unauthorized, InvalidId, InvalidName, InvalidPercentage,
            InvalidStudyHours, AlreadyExists
        """
        await self.registry.require_authorized(caller)
        validate_student_id(student_id)
        validate_student_name(name)
        validate_attendance(attendance)
        validate_study_hours(study_hours)

        student = await self.db.get(Student, student_id)
        if student is not None and student.is_active:
            raise AlreadyExists(f"Student already exists with ID: {student_id}")

        if student is None:
            student = Student(id=student_id)
            self.db.add(student)
        else:
            logger.info(f"Re-registering deactivated student {student_id}")

        # Overwrites every field of a deactivated record
        student.name = name
        student.grades = []
        student.attendance_percentage = attendance
        student.study_hours = study_hours
        student.predicted_score = 0
        student.is_active = True
        student.registered_by = caller
        student.created_at = utcnow()

        self.db.add(StudentEnumeration(student_id=student_id))
        self.recorder.record(events.REGISTER, actor=caller, student_id=student_id, name=name)
        return student

    async def deactivate(self, caller: str, student_id: int) -> Student:
        """Soft-delete a student. There is no way back except re-registration."""
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)

        student.is_active = False
        self.recorder.record(events.DEACTIVATE, actor=caller, student_id=student_id)
        return student

    # ========================================================================
    # Grades
    # ========================================================================

    async def add_grade(self, caller: str, student_id: int, grade: int) -> Student:
        """Append one grade and refresh aggregate metrics."""
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)
        validate_grade(grade)

        return await self._append_grades(caller, student, [grade])

    async def add_grades(self, caller: str, student_id: int, grades: Sequence[int]) -> Student:
        """Append a batch of 1-50 grades atomically.

        Every grade is validated before the first one is appended, so a bad
        entry leaves the record and its metrics untouched.
        """
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)
        batch = validate_grade_batch(grades)

        return await self._append_grades(caller, student, batch)

    async def _append_grades(self, caller: str, student: Student, batch: list[int]) -> Student:
        # Reassign rather than mutate so the JSON column is marked dirty
        student.grades = [*student.grades, *batch]

        aggregate = metrics.recompute_aggregate(student.grades)
        if aggregate is not None:
            record = await self._metrics_for(student.id)
            record.average_grade = aggregate.average_grade
            record.improvement_rate = aggregate.improvement_rate
            record.last_updated = utcnow()

        for grade in batch:
            self.recorder.record(
                events.GRADE_ADDED, actor=caller, student_id=student.id, grade=grade
            )
        return student

    # ========================================================================
    # Attendance and study hours (no metric refresh)
    # ========================================================================

    async def update_attendance(self, caller: str, student_id: int, percentage: int) -> Student:
        """Overwrite attendance. Metrics and prediction are left as they are."""
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)
        validate_attendance(percentage)

        student.attendance_percentage = percentage
        self.recorder.record(
            events.ATTENDANCE_UPDATED,
            actor=caller,
            student_id=student_id,
            attendance_percentage=percentage,
        )
        return student

    async def update_study_hours(self, caller: str, student_id: int, hours: int) -> Student:
        """Overwrite weekly study hours. Emits no event and refreshes nothing."""
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)
        validate_study_hours(hours)

        student.study_hours = hours
        return student

    # ========================================================================
    # Prediction
    # ========================================================================

    async def predict(
        self, caller: str, student_id: int
    ) -> tuple[Student, PerformanceMetrics, metrics.Prediction]:
        """Run a full prediction and persist it.

        Raises:
            Unauthorized, NotFound, NoGradesAvailable
        """
        await self.registry.require_authorized(caller)
        student = await load_active_student(self.db, student_id)

        prediction = metrics.predict(
            student.grades, student.attendance_percentage, student.study_hours
        )

        student.predicted_score = prediction.predicted_score
        record = await self._metrics_for(student_id)
        record.average_grade = prediction.average_grade
        record.improvement_rate = prediction.improvement_rate
        record.category = prediction.category.value
        record.confidence_score = prediction.confidence_score
        record.last_updated = utcnow()

        self.recorder.record(
            events.PREDICTION,
            actor=caller,
            student_id=student_id,
            predicted_score=prediction.predicted_score,
            category=prediction.category.value,
        )
        logger.info(
            f"Predicted {prediction.predicted_score} ({prediction.category}) "
            f"for student {student_id}"
        )
        return student, record, prediction

    async def _metrics_for(self, student_id: int) -> PerformanceMetrics:
        """Fetch the metrics row, creating an empty one on first use."""
        record = await self.db.get(PerformanceMetrics, student_id)
        if record is None:
            record = PerformanceMetrics(
                student_id=student_id,
                average_grade=0,
                improvement_rate=0,
                category=None,
                confidence_score=0,
                last_updated=utcnow(),
            )
            self.db.add(record)
        return record
