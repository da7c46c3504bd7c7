"""
GradeLedger FastAPI Application

Student academic record ledger with deterministic performance prediction.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from gradeledger.config import settings
from gradeledger.core.database import async_session_maker, close_db, init_db
from gradeledger.core.errors import LedgerError
from gradeledger.ledger import StudentLedger

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Root logging setup driven by LOG_LEVEL."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Create ledger tables
    - Create the ledger with the configured owner

    Shutdown:
    - Close database connections
    """
    logger.info("GradeLedger starting...")

    try:
        await init_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.state.ledger = StudentLedger(async_session_maker, owner=settings.LEDGER_OWNER)
    logger.info(f"GradeLedger ready (owner: {settings.LEDGER_OWNER})")

    yield

    logger.info("GradeLedger shutting down...")
    await close_db()
    logger.info("Shutdown complete")


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Map ledger errors to JSON responses with a stable error code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    configure_logging()

    app = FastAPI(
        title="GradeLedger",
        description="Student academic record ledger with performance prediction",
        version="0.1.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)  # type: ignore[arg-type]

    # Health check endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "GradeLedger",
            "status": "operational",
            "version": "0.1.0",
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint for load balancers.

        Returns:
            - status: healthy/unhealthy
            - checks: Individual health checks
        """
        checks: dict[str, dict[str, Any]] = {}

        ledger: StudentLedger | None = getattr(request.app.state, "ledger", None)

        # Database health
        try:
            if ledger is None:
                raise RuntimeError("Ledger not initialized")
            async with ledger.session_maker() as db:
                await db.execute(text("SELECT 1"))
            checks["database"] = {"status": "healthy"}
        except Exception as e:
            checks["database"] = {"status": "unhealthy", "error": str(e)}

        # Ledger health
        try:
            if ledger is None:
                raise RuntimeError("Ledger not initialized")
            checks["ledger"] = {"status": "healthy", "students": await ledger.count()}
        except Exception as e:
            checks["ledger"] = {"status": "unhealthy", "error": str(e)}

        # Overall status
        all_healthy = all(check["status"] == "healthy" for check in checks.values())
        status_code = 200 if all_healthy else 503

        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check(request: Request) -> dict[str, str] | JSONResponse:
        """Readiness check for Kubernetes.

        Returns 200 when app is ready to serve traffic.
        """
        ledger: StudentLedger | None = getattr(request.app.state, "ledger", None)
        try:
            if ledger is None:
                raise RuntimeError("Ledger not initialized")
            async with ledger.session_maker() as db:
                await db.execute(text("SELECT 1"))
            return {"status": "ready"}
        except Exception:
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready"},
            )

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check for Kubernetes.

        Returns 200 if app is alive (even if not fully functional).
        """
        return {"status": "alive"}

    # Register API routers
    from gradeledger.api.v1 import authorization, categories, students

    app.include_router(
        authorization.router, prefix="/api/v1/authorization", tags=["Authorization"]
    )
    app.include_router(students.router, prefix="/api/v1/students", tags=["Students"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["Categories"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gradeledger.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
