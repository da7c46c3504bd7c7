"""
Authorization Registry

One permanent owner plus an allow-list of identities that may mutate ledger
data. Only the owner can change the allow-list.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gradeledger.core.errors import (
    AlreadyAuthorized,
    CannotModifyOwner,
    InvalidTarget,
    NotAuthorized,
    Unauthorized,
)
from gradeledger.core.models import AuthorizedCaller
from gradeledger.ledger import events

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from gradeledger.ledger.events import EventRecorder

logger = logging.getLogger(__name__)


class AuthorizationRegistry:
    """Owner plus allow-list, backed by the ``authorized_callers`` table."""

    def __init__(self, db: AsyncSession, *, owner: str, recorder: EventRecorder | None = None):
        """Initialize registry.

        Args:
            db: Database session (the caller owns the transaction)
            owner: Owner identity, fixed for the ledger's lifetime
            recorder: Audit event recorder for the same session (created if omitted)
        """
        self.db = db
        self.owner = owner
        self.recorder = recorder or events.EventRecorder(db)

    async def is_authorized(self, identity: str | None) -> bool:
        """Check whether an identity may perform mutating operations."""
        if not identity:
            return False
        if identity == self.owner:
            return True
        return await self.db.get(AuthorizedCaller, identity) is not None

    async def require_authorized(self, caller: str | None) -> None:
        """Guard used by every mutating operation.

        Raises:
            Unauthorized: If caller is neither the owner nor on the allow-list
        """
        if not await self.is_authorized(caller):
            raise Unauthorized(f"Caller {caller!r} is not authorized")

    def _require_owner(self, caller: str | None) -> None:
        if caller != self.owner:
            raise Unauthorized(f"Only the ledger owner may change authorizations, not {caller!r}")

    async def authorize(self, caller: str | None, target: str | None) -> None:
        """Add an identity to the allow-list.

        Raises:
            Unauthorized: If caller is not the owner
            InvalidTarget: If target is empty
            AlreadyAuthorized: If target is already on the allow-list
        """
        self._require_owner(caller)

        if not target or not target.strip():
            raise InvalidTarget()

        # The owner is implicitly on the list
        if target == self.owner or await self.db.get(AuthorizedCaller, target) is not None:
            raise AlreadyAuthorized(f"Identity {target!r} is already authorized")

        self.db.add(AuthorizedCaller(identity=target, authorized_by=caller))
        self.recorder.record(events.AUTHORIZE, actor=caller, target=target)  # type: ignore[arg-type]
        logger.info(f"Authorized {target} (by {caller})")

    async def deauthorize(self, caller: str | None, target: str | None) -> None:
        """Remove an identity from the allow-list.

        Raises:
            Unauthorized: If caller is not the owner
            CannotModifyOwner: If target is the owner
            NotAuthorized: If target is not on the allow-list
        """
        self._require_owner(caller)

        if target == self.owner:
            raise CannotModifyOwner()

        entry = await self.db.get(AuthorizedCaller, target) if target else None
        if entry is None:
            raise NotAuthorized(f"Identity {target!r} is not authorized")

        await self.db.delete(entry)
        self.recorder.record(events.DEAUTHORIZE, actor=caller, target=target)  # type: ignore[arg-type]
        logger.info(f"Deauthorized {target} (by {caller})")
