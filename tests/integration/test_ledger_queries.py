"""
Integration tests for read-only ledger queries.
"""

import pytest
from pydantic import ValidationError

from gradeledger.core.errors import InvalidLimit, NotFound, OffsetOutOfBounds
from gradeledger.ledger import StudentLedger

OWNER = "registrar"


@pytest.fixture
async def enumerated(ledger: StudentLedger) -> StudentLedger:
    """Ledger with students 5, 7, 9 and 11 registered in that order."""
    for student_id in (5, 7, 9, 11):
        await ledger.register(OWNER, student_id, f"Student {student_id}", 80, 10)
    return ledger


class TestListIds:
    """Pagination over the registration enumeration."""

    async def test_first_page(self, enumerated: StudentLedger):
        assert await enumerated.list_ids(0, 2) == [5, 7]

    async def test_last_page_is_clipped(self, enumerated: StudentLedger):
        assert await enumerated.list_ids(3, 5) == [11]

    async def test_offset_at_end_rejected(self, enumerated: StudentLedger):
        with pytest.raises(OffsetOutOfBounds):
            await enumerated.list_ids(4, 1)

    async def test_empty_ledger_rejects_any_offset(self, ledger: StudentLedger):
        with pytest.raises(OffsetOutOfBounds):
            await ledger.list_ids(0, 10)

    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_bounds(self, enumerated: StudentLedger, limit):
        with pytest.raises(InvalidLimit):
            await enumerated.list_ids(0, limit)

    async def test_max_limit(self, enumerated: StudentLedger):
        assert await enumerated.list_ids(1, 100) == [7, 9, 11]

    async def test_includes_deactivated(self, enumerated: StudentLedger):
        await enumerated.deactivate(OWNER, 7)

        assert await enumerated.list_ids(0, 4) == [5, 7, 9, 11]


class TestCount:
    """Total registrations, not active students."""

    async def test_empty(self, ledger: StudentLedger):
        assert await ledger.count() == 0

    async def test_counts_deactivated(self, enumerated: StudentLedger):
        await enumerated.deactivate(OWNER, 5)
        await enumerated.deactivate(OWNER, 9)

        assert await enumerated.count() == 4


class TestGet:
    """Single-record lookups return detached snapshots."""

    async def test_get_snapshot(self, enumerated: StudentLedger):
        student = await enumerated.get(9)

        assert student.id == 9
        assert student.name == "Student 9"

    async def test_snapshot_does_not_alias_ledger(self, enumerated: StudentLedger):
        before = await enumerated.get(5)
        await enumerated.add_grade(OWNER, 5, 70)

        assert before.grades == ()
        assert (await enumerated.get(5)).grades == (70,)

    async def test_snapshot_is_frozen(self, enumerated: StudentLedger):
        student = await enumerated.get(5)

        with pytest.raises(ValidationError):
            student.name = "Changed"  # type: ignore[misc]

    @pytest.mark.parametrize("student_id", [0, -1, 3, 1000])
    async def test_unknown_ids(self, enumerated: StudentLedger, student_id):
        with pytest.raises(NotFound):
            await enumerated.get(student_id)

    async def test_id_beyond_storage_range(self, enumerated: StudentLedger):
        with pytest.raises(NotFound):
            await enumerated.get(2**70)
        with pytest.raises(NotFound):
            await enumerated.get_metrics(2**70)

        assert await enumerated.is_active(2**70) is False
        assert await enumerated.list_events(student_id=2**70) == []

    async def test_metrics_default_when_never_computed(self, enumerated: StudentLedger):
        metrics = await enumerated.get_metrics(5)

        assert metrics.student_id == 5
        assert metrics.average_grade == 0
        assert metrics.improvement_rate == 0
        assert metrics.category is None
        assert metrics.confidence_score == 0
        assert metrics.last_updated is None

    async def test_is_active(self, enumerated: StudentLedger):
        assert await enumerated.is_active(5) is True
        assert await enumerated.is_active(6) is False


class TestCategoryLabel:
    """Label lookup through the ledger."""

    async def test_known_and_unknown(self, ledger: StudentLedger):
        assert ledger.category_label("NeedsImprovement") == "Needs Improvement"
        assert ledger.category_label("Stellar") == "Unknown"


class TestEvents:
    """Audit trail queries."""

    async def test_events_in_order(self, enumerated: StudentLedger):
        events = await enumerated.list_events()

        assert [e.operation for e in events] == ["register"] * 4
        assert [e.student_id for e in events] == [5, 7, 9, 11]

    async def test_limit_keeps_most_recent(self, enumerated: StudentLedger):
        events = await enumerated.list_events(limit=2)

        assert [e.student_id for e in events] == [9, 11]

    async def test_filter_by_student(self, enumerated: StudentLedger):
        await enumerated.add_grade(OWNER, 7, 60)

        events = await enumerated.list_events(student_id=7)
        assert [e.operation for e in events] == ["register", "grade_added"]
