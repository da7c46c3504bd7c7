"""
Authorization Models

Callers allowed to mutate ledger data, besides the owner.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class AuthorizedCaller(Base):
    """An identity granted write access by the ledger owner."""

    __tablename__ = "authorized_callers"

    identity: Mapped[str] = mapped_column(String(100), primary_key=True)
    authorized_by: Mapped[str] = mapped_column(String(100), nullable=False)
    authorized_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
