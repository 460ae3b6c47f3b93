"""Main FastAPI application."""

import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from .api import directories_router, documents_router
from .core.config import settings, ConfigurationError, Environment
from .core.logging_config import setup_logging
from .database import DATABASE_URL, get_db, init_db, is_postgresql
from .exceptions import DocsException
from .middleware.exception_handler import (
    docs_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from .middleware.request_context import RequestContextMiddleware

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


def _mask_url(url: str) -> str:
    """Mask the password in a database URL for safe logging."""
    return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: validate configuration and make sure the schema exists."""
    logger.info(f"Environment: {settings.environment.value}")
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT and not settings.auth_enabled:
        logger.warning(
            "SECURITY: Authentication is disabled (AUTH_ENABLED=false). "
            "Every request acts as user %s.",
            settings.dev_user_id,
        )

    try:
        init_db()
    except SQLAlchemyError as e:
        logger.critical(
            "Database initialisation failed.\n"
            f"  DATABASE_URL: {_mask_url(DATABASE_URL)}\n"
            f"  Error: {e}"
        )
        raise SystemExit(1) from e

    yield


app = FastAPI(
    title="Docs Service API",
    description=(
        "Hierarchical document collections: per-project directory trees, "
        "ordered documents and an append-only edit history.\n\n"
        "**Authentication:** when `AUTH_ENABLED=true` every endpoint requires a "
        "`Bearer` token whose subject is the acting user id."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Middleware stack, outermost first: CORS wraps request context.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestContextMiddleware)

app.add_exception_handler(DocsException, docs_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

logger.info(
    "Docs service configured | env=%s | db=%s | auth=%s",
    settings.environment.value,
    "PostgreSQL" if is_postgresql() else "SQLite",
    "enabled" if settings.auth_enabled else "disabled",
)

app.include_router(directories_router)
app.include_router(documents_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "Docs Service API",
        "version": __version__,
        "status": "running"
    }


_startup_time = time.monotonic()


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Database status, uptime and row counts.

    Never raises. Returns degraded status on DB failure so load balancers
    can still poll it without receiving 5xx.
    """
    db_status = "ok"
    directory_count = 0
    document_count = 0
    try:
        db.execute(text("SELECT 1"))
        directory_count = db.execute(text("SELECT COUNT(*) FROM directories")).scalar() or 0
        document_count = db.execute(text("SELECT COUNT(*) FROM documents")).scalar() or 0
    except SQLAlchemyError:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": __version__,
        "directory_count": directory_count,
        "document_count": document_count,
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("docs_service.main:app", host="0.0.0.0", port=8000)
