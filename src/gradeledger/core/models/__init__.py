"""
GradeLedger SQLAlchemy Models
"""

from .authorization import AuthorizedCaller
from .base import Base, CreatedAtMixin, utcnow
from .events import LedgerEvent
from .students import PerformanceMetrics, Student, StudentEnumeration

__all__ = [
    # Base
    "Base",
    "CreatedAtMixin",
    "utcnow",
    # Authorization
    "AuthorizedCaller",
    # Students
    "Student",
    "PerformanceMetrics",
    "StudentEnumeration",
    # Audit
    "LedgerEvent",
]
