"""
Audit event recording.

Every mutating ledger operation writes a LedgerEvent row inside the same
transaction as the mutation and mirrors it to the ``gradeledger.audit``
logger.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from gradeledger.core.models import LedgerEvent, utcnow
from gradeledger.core.validation import MAX_STUDENT_ID

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

audit_logger = logging.getLogger("gradeledger.audit")

# Operation names
AUTHORIZE = "authorize"
DEAUTHORIZE = "deauthorize"
REGISTER = "register"
GRADE_ADDED = "grade_added"
ATTENDANCE_UPDATED = "attendance_updated"
DEACTIVATE = "deactivate"
PREDICTION = "prediction"


class EventRecorder:
    """Writes audit events for one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def record(
        self,
        operation: str,
        *,
        actor: str,
        student_id: int | None = None,
        **details: Any,
    ) -> LedgerEvent:
        """Add an event to the current transaction.

        Args:
            operation: Operation name (see module constants)
            actor: Identity of the caller
            student_id: Affected student, if any
            **details: Operation-specific JSON-serializable fields

        Returns:
            The pending LedgerEvent
        """
        event = LedgerEvent(
            operation=operation,
            student_id=student_id,
            actor=actor,
            details=details,
            occurred_at=utcnow(),
        )
        self.db.add(event)

        audit_logger.info(
            "%s student=%s actor=%s",
            operation,
            student_id,
            actor,
            extra={
                "operation": operation,
                "student_id": student_id,
                "actor": actor,
                "details": details,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
        return event


async def list_events(
    db: AsyncSession, *, student_id: int | None = None, limit: int = 100
) -> list[LedgerEvent]:
    """Most recent events, returned oldest first.

    Args:
        db: Database session
        student_id: Only events for this student when given
        limit: Maximum number of events
    """
    if student_id is not None and not 0 < student_id <= MAX_STUDENT_ID:
        return []

    stmt = select(LedgerEvent)
    if student_id is not None:
        stmt = stmt.where(LedgerEvent.student_id == student_id)
    stmt = stmt.order_by(LedgerEvent.id.desc()).limit(limit)

    result = await db.execute(stmt)
    events = list(result.scalars().all())
    events.reverse()
    return events
