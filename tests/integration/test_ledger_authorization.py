"""
Integration tests for the authorization registry.
"""

import pytest
from sqlalchemy import select

from gradeledger.core.errors import (
    AlreadyAuthorized,
    CannotModifyOwner,
    InvalidTarget,
    NotAuthorized,
    Unauthorized,
)
from gradeledger.core.models import AuthorizedCaller, LedgerEvent
from gradeledger.ledger import StudentLedger

OWNER = "registrar"
TEACHER = "teacher-1"


class TestAuthorize:
    """Adding identities to the allow-list."""

    async def test_owner_is_always_authorized(self, ledger: StudentLedger):
        assert await ledger.is_authorized(OWNER) is True

    async def test_owner_authorizes_identity(self, ledger: StudentLedger):
        await ledger.authorize(OWNER, TEACHER)

        assert await ledger.is_authorized(TEACHER) is True

    async def test_non_owner_cannot_authorize(self, authorized_ledger: StudentLedger):
        # Even an authorized caller cannot manage the list
        with pytest.raises(Unauthorized):
            await authorized_ledger.authorize(TEACHER, "teacher-2")

        assert await authorized_ledger.is_authorized("teacher-2") is False

    async def test_unauthorized_checked_before_target(self, ledger: StudentLedger):
        with pytest.raises(Unauthorized):
            await ledger.authorize("stranger", "")

    @pytest.mark.parametrize("target", ["", "   ", None])
    async def test_null_target_rejected(self, ledger: StudentLedger, target):
        with pytest.raises(InvalidTarget):
            await ledger.authorize(OWNER, target)

    async def test_duplicate_rejected(self, authorized_ledger: StudentLedger):
        with pytest.raises(AlreadyAuthorized):
            await authorized_ledger.authorize(OWNER, TEACHER)

    async def test_owner_counts_as_authorized(self, ledger: StudentLedger):
        with pytest.raises(AlreadyAuthorized):
            await ledger.authorize(OWNER, OWNER)

    async def test_emits_event(self, ledger: StudentLedger, db_session):
        await ledger.authorize(OWNER, TEACHER)

        result = await db_session.execute(select(LedgerEvent))
        event = result.scalar_one()
        assert event.operation == "authorize"
        assert event.actor == OWNER
        assert event.details == {"target": TEACHER}


class TestDeauthorize:
    """Removing identities from the allow-list."""

    async def test_owner_deauthorizes(self, authorized_ledger: StudentLedger, db_session):
        await authorized_ledger.deauthorize(OWNER, TEACHER)

        assert await authorized_ledger.is_authorized(TEACHER) is False
        result = await db_session.execute(select(AuthorizedCaller))
        assert result.scalars().all() == []

    async def test_non_owner_cannot_deauthorize(self, authorized_ledger: StudentLedger):
        with pytest.raises(Unauthorized):
            await authorized_ledger.deauthorize(TEACHER, TEACHER)

    async def test_cannot_remove_owner(self, ledger: StudentLedger):
        with pytest.raises(CannotModifyOwner):
            await ledger.deauthorize(OWNER, OWNER)

        assert await ledger.is_authorized(OWNER) is True

    async def test_absent_identity_rejected(self, ledger: StudentLedger):
        with pytest.raises(NotAuthorized):
            await ledger.deauthorize(OWNER, "nobody")

    async def test_reauthorize_after_removal(self, authorized_ledger: StudentLedger):
        await authorized_ledger.deauthorize(OWNER, TEACHER)
        await authorized_ledger.authorize(OWNER, TEACHER)

        assert await authorized_ledger.is_authorized(TEACHER) is True

    async def test_removed_identity_loses_write_access(self, authorized_ledger: StudentLedger):
        await authorized_ledger.deauthorize(OWNER, TEACHER)

        with pytest.raises(Unauthorized):
            await authorized_ledger.register(TEACHER, 1, "Ama", 90, 10)


class TestRequireAuthorized:
    """The guard used by mutations."""

    @pytest.mark.parametrize("caller", ["stranger", "", None])
    async def test_rejects_unknown_callers(self, ledger: StudentLedger, caller):
        with pytest.raises(Unauthorized):
            await ledger.register(caller, 1, "Ama", 90, 10)

    async def test_allows_listed_caller(self, authorized_ledger: StudentLedger):
        student = await authorized_ledger.register(TEACHER, 1, "Ama", 90, 10)

        assert student.registered_by == TEACHER
