"""
Audit Event Models

One row per state change, in the order the changes were applied.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class LedgerEvent(Base):
    """Structured audit record emitted by every mutating operation."""

    __tablename__ = "ledger_events"
    __table_args__ = (Index("idx_events_student", "student_id"),)

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, comment="Insertion order"
    )
    operation: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="authorize, deauthorize, register, grade_added, attendance_updated, "
        "deactivate, prediction",
    )
    student_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actor: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
