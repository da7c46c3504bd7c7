"""
Ledger Module

Student record store, authorization registry, deterministic metrics engine
and read-only queries.
"""

from .authorization import AuthorizationRegistry
from .events import EventRecorder
from .queries import QueryService
from .records import StudentRecordStore
from .service import StudentLedger

__all__ = [
    "AuthorizationRegistry",
    "EventRecorder",
    "QueryService",
    "StudentLedger",
    "StudentRecordStore",
]
