"""
Read-only ledger queries.

No authorization is required. Every result is a snapshot copy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from gradeledger.core.categories import category_label
from gradeledger.core.errors import NotFound
from gradeledger.core.models import PerformanceMetrics, Student, StudentEnumeration
from gradeledger.core.schemas import LedgerEventSchema, MetricsSnapshot, StudentSnapshot
from gradeledger.core.validation import validate_page
from gradeledger.ledger.events import list_events
from gradeledger.ledger.records import load_active_student

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class QueryService:
    """Read accessors over the student table and the enumeration."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, student_id: int) -> StudentSnapshot:
        """Snapshot of an active student.

        Raises:
            NotFound: If the student is absent or deactivated
        """
        student = await load_active_student(self.db, student_id)
        return StudentSnapshot.model_validate(student)

    async def get_metrics(self, student_id: int) -> MetricsSnapshot:
        """Snapshot of an active student's metrics, all zero if never computed.

        Raises:
            NotFound: If the student is absent or deactivated
        """
        await load_active_student(self.db, student_id)

        record = await self.db.get(PerformanceMetrics, student_id)
        if record is None:
            return MetricsSnapshot(student_id=student_id)
        return MetricsSnapshot.model_validate(record)

    async def is_active(self, student_id: int) -> bool:
        """Existence check that never raises."""
        try:
            await load_active_student(self.db, student_id)
        except NotFound:
            return False
        return True

    @staticmethod
    def category_label(category: object) -> str:
        """Display label for a category; "Unknown" for anything unrecognized."""
        return category_label(category)

    async def count(self) -> int:
        """Number of registrations ever made.

        Includes deactivated students and counts a re-registered identifier
        once per registration. This is not the number of active students.
        """
        result = await self.db.execute(select(func.count()).select_from(StudentEnumeration))
        return result.scalar_one()

    async def list_ids(self, offset: int, limit: int) -> list[int]:
        """Identifiers in registration order, starting at ``offset``.

        May include deactivated students.

        Raises:
            InvalidLimit: If limit is outside 1-100
            OffsetOutOfBounds: If offset is not below count()
        """
        total = await self.count()
        start, end = validate_page(offset, limit, total)

        result = await self.db.execute(
            select(StudentEnumeration.student_id)
            .order_by(StudentEnumeration.position)
            .offset(start)
            .limit(end - start)
        )
        return list(result.scalars().all())

    async def list_events(
        self, *, student_id: int | None = None, limit: int = 100
    ) -> list[LedgerEventSchema]:
        """Recent audit events, oldest first."""
        rows = await list_events(self.db, student_id=student_id, limit=limit)
        return [LedgerEventSchema.model_validate(row) for row in rows]
