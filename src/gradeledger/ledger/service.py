"""
Student Ledger Service

The explicit store object callers hold. It wires the authorization registry,
record store, metrics engine and query service over one database, and
serializes every mutation:

- mutations run one at a time behind an asyncio lock, each in its own
  transaction (committed on success, rolled back on any error)
- reads take no lock and see the last committed state
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gradeledger.core.schemas import (
    LedgerEventSchema,
    MetricsSnapshot,
    PredictionResult,
    StudentSnapshot,
)
from gradeledger.ledger.authorization import AuthorizationRegistry
from gradeledger.ledger.events import EventRecorder
from gradeledger.ledger.queries import QueryService
from gradeledger.ledger.records import StudentRecordStore

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


@dataclass
class _UnitOfWork:
    """Components bound to one transaction."""

    db: AsyncSession
    registry: AuthorizationRegistry
    store: StudentRecordStore


class StudentLedger:
    """Entry point for every ledger operation."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], *, owner: str):
        """Initialize ledger.

        Args:
            session_maker: Factory for database sessions
            owner: Permanent owner identity
        """
        if not owner or not owner.strip():
            raise ValueError("Ledger owner identity cannot be empty")

        self.session_maker = session_maker
        self.owner = owner
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[_UnitOfWork]:
        async with self._lock, self.session_maker() as db:
            try:
                recorder = EventRecorder(db)
                registry = AuthorizationRegistry(db, owner=self.owner, recorder=recorder)
                store = StudentRecordStore(db, registry=registry, recorder=recorder)
                yield _UnitOfWork(db=db, registry=registry, store=store)
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    @asynccontextmanager
    async def _reader(self) -> AsyncIterator[QueryService]:
        async with self.session_maker() as db:
            yield QueryService(db)

    # ========================================================================
    # Authorization
    # ========================================================================

    async def authorize(self, caller: str, target: str) -> None:
        async with self._mutation() as uow:
            await uow.registry.authorize(caller, target)

    async def deauthorize(self, caller: str, target: str) -> None:
        async with self._mutation() as uow:
            await uow.registry.deauthorize(caller, target)

    async def is_authorized(self, identity: str) -> bool:
        async with self.session_maker() as db:
            registry = AuthorizationRegistry(db, owner=self.owner)
            return await registry.is_authorized(identity)

    # ========================================================================
    # Student mutations
    # ========================================================================

    async def register(
        self,
        caller: str,
        student_id: int,
        name: str,
        attendance: int,
        study_hours: int,
    ) -> StudentSnapshot:
        async with self._mutation() as uow:
            student = await uow.store.register(caller, student_id, name, attendance, study_hours)
            return StudentSnapshot.model_validate(student)

    async def add_grade(self, caller: str, student_id: int, grade: int) -> StudentSnapshot:
        async with self._mutation() as uow:
            student = await uow.store.add_grade(caller, student_id, grade)
            return StudentSnapshot.model_validate(student)

    async def add_grades(
        self, caller: str, student_id: int, grades: Sequence[int]
    ) -> StudentSnapshot:
        async with self._mutation() as uow:
            student = await uow.store.add_grades(caller, student_id, grades)
            return StudentSnapshot.model_validate(student)

    async def update_attendance(
        self, caller: str, student_id: int, percentage: int
    ) -> StudentSnapshot:
        async with self._mutation() as uow:
            student = await uow.store.update_attendance(caller, student_id, percentage)
            return StudentSnapshot.model_validate(student)

    async def update_study_hours(self, caller: str, student_id: int, hours: int) -> StudentSnapshot:
        async with self._mutation() as uow:
            student = await uow.store.update_study_hours(caller, student_id, hours)
            return StudentSnapshot.model_validate(student)

    async def deactivate(self, caller: str, student_id: int) -> None:
        async with self._mutation() as uow:
            await uow.store.deactivate(caller, student_id)
        logger.info(f"Student {student_id} deactivated by {caller}")

    async def predict(self, caller: str, student_id: int) -> PredictionResult:
        async with self._mutation() as uow:
            _, record, prediction = await uow.store.predict(caller, student_id)
            return PredictionResult(
                student_id=student_id,
                predicted_score=prediction.predicted_score,
                category=prediction.category,
                confidence_score=prediction.confidence_score,
                metrics=MetricsSnapshot.model_validate(record),
            )

    # ========================================================================
    # Reads
    # ========================================================================

    async def get(self, student_id: int) -> StudentSnapshot:
        async with self._reader() as queries:
            return await queries.get(student_id)

    async def get_metrics(self, student_id: int) -> MetricsSnapshot:
        async with self._reader() as queries:
            return await queries.get_metrics(student_id)

    async def is_active(self, student_id: int) -> bool:
        async with self._reader() as queries:
            return await queries.is_active(student_id)

    def category_label(self, category: object) -> str:
        return QueryService.category_label(category)

    async def count(self) -> int:
        async with self._reader() as queries:
            return await queries.count()

    async def list_ids(self, offset: int, limit: int) -> list[int]:
        async with self._reader() as queries:
            return await queries.list_ids(offset, limit)

    async def list_events(
        self, *, student_id: int | None = None, limit: int = 100
    ) -> list[LedgerEventSchema]:
        async with self._reader() as queries:
            return await queries.list_events(student_id=student_id, limit=limit)
