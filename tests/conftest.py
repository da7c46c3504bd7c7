"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, integration and API tests. Every test gets a
fresh in-memory SQLite database.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import configure_mappers

from gradeledger.core.database import build_engine, build_session_maker, init_db
from gradeledger.core.models import (  # noqa: F401 - imported for SQLAlchemy registration
    AuthorizedCaller,
    Base,
    LedgerEvent,
    PerformanceMetrics,
    Student,
    StudentEnumeration,
)
from gradeledger.ledger import StudentLedger

# Ensure all mappers are configured
configure_mappers()

OWNER = "registrar"
TEACHER = "teacher-1"
STRANGER = "stranger"


@pytest.fixture
async def async_engine():
    """Create async engine for testing."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(async_engine):
    """Session factory bound to the test engine."""
    return build_session_maker(async_engine)


@pytest.fixture
async def db_session(session_maker):
    """Create database session for testing."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def ledger(session_maker) -> StudentLedger:
    """Ledger owned by OWNER on an empty database."""
    return StudentLedger(session_maker, owner=OWNER)


@pytest.fixture
async def authorized_ledger(ledger: StudentLedger) -> StudentLedger:
    """Ledger where TEACHER is on the allow-list."""
    await ledger.authorize(OWNER, TEACHER)
    return ledger


@pytest.fixture
async def client(ledger: StudentLedger) -> AsyncClient:
    """Create test client wired to the test ledger."""
    from gradeledger.main import create_app

    app = create_app()
    # ASGITransport does not run the lifespan, so the ledger is injected directly
    app.state.ledger = ledger

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
