"""
SQLAlchemy Base Model and Mixins

Provides base class and common mixins for all GradeLedger models.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, event, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CreatedAtMixin:
    """Mixin for an immutable creation timestamp.

    All timestamps use UTC (timezone-aware).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp (UTC)",
    )


# Event listener to stamp in-memory objects before they are flushed
@event.listens_for(CreatedAtMixin, "init", propagate=True)
def receive_init_created_at(target, args, kwargs):  # type: ignore[no-untyped-def]
    """Auto-generate creation timestamp on instance creation if not provided."""
    if "created_at" not in kwargs:
        target.created_at = utcnow()
