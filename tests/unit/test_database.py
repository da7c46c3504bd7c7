"""
Tests for database engine construction and schema creation.
"""

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from gradeledger.core.database import build_engine, build_session_maker, close_db, init_db


class TestBuildEngine:
    """Test engine configuration."""

    async def test_memory_sqlite_uses_static_pool(self) -> None:
        engine = build_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert isinstance(engine.pool, StaticPool)
        finally:
            await engine.dispose()

    async def test_file_sqlite_uses_default_pool(self, tmp_path) -> None:
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
        try:
            assert not isinstance(engine.pool, StaticPool)
        finally:
            await engine.dispose()


class TestInitDb:
    """Test schema creation."""

    async def test_creates_ledger_tables(self, async_engine) -> None:
        async with async_engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

        assert set(tables) >= {
            "students",
            "performance_metrics",
            "student_enumeration",
            "authorized_callers",
            "ledger_events",
        }

    async def test_init_is_idempotent(self, async_engine) -> None:
        await init_db(async_engine)

        async with build_session_maker(async_engine)() as session:
            assert isinstance(session, AsyncSession)
            result = await session.execute(text("SELECT COUNT(*) FROM students"))
            assert result.scalar() == 0

    async def test_close_db_disposes_given_engine(self) -> None:
        engine = build_engine("sqlite+aiosqlite:///:memory:")
        await init_db(engine)

        await close_db(engine)
