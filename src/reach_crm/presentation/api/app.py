"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers. The database engine and session maker
are created per application and kept on ``app.state``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Imported for their side effect of registering tables on Base.metadata
import reach_crm.infrastructure.persistence.sqlalchemy.models  # noqa: F401
import reach_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from reach_config.settings import Settings, get_settings
from reach_crm.presentation.api.exception_handlers import setup_exception_handlers
from reach_crm.presentation.api.routers import (
    auth_router,
    contacts_router,
    oauth_router,
    users_router,
)
from reach_identity.infrastructure.persistence.sqlalchemy.base import Base

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Local accounts and sessions.

- Signup with an activation email, login with email or mobile
- Password reset by emailed, single-use link
- Stateless JWT session tokens (`Authorization: Bearer <token>`)
""",
    },
    {
        "name": "OAuth",
        "description": "Login with Google, GitHub or Facebook.",
    },
    {
        "name": "Users",
        "description": "User directory (requires a session token).",
    },
    {
        "name": "Contacts",
        "description": "Contact cards (requires a session token).",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


def _configure_logging(settings: Settings) -> None:
    """Configure application logging.

    Console output with timestamps and module names, the configured level
    for reach modules and WARNING for noisy third-party libraries.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("reach_auth", "reach_identity", "reach_crm"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def _create_engine(database_url: str) -> AsyncEngine:
    # Ensure data directory exists for SQLite
    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        db_path = database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Reach API v%s...", API_VERSION)
    engine: AsyncEngine = app.state.engine
    await _init_database_schema(engine)
    yield

    logger.info("Shutting down Reach API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    app = FastAPI(
        title="Reach CRM API",
        description="Authentication, user directory and contacts for Reach CRM.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    engine = _create_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Provider routes match last so /auth/me and /auth/activate win
    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(oauth_router, prefix="/auth", tags=["OAuth"])
    app.include_router(users_router, prefix="/users", tags=["Users"])
    app.include_router(contacts_router, prefix="/contacts", tags=["Contacts"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app
