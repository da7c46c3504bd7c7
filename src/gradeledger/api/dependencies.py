"""
Shared FastAPI dependencies.
"""

from fastapi import Request

from gradeledger.config import settings
from gradeledger.ledger import StudentLedger


def get_ledger(request: Request) -> StudentLedger:
    """The ledger created during application startup."""
    ledger: StudentLedger = request.app.state.ledger
    return ledger


def get_caller(request: Request) -> str:
    """Identity of the calling user, empty when the header is missing."""
    return request.headers.get(settings.CALLER_HEADER, "").strip()
