"""Root pytest configuration.

Test Structure:
    tests/
    ├── reach_auth/            # Token codec and password hashing (real bcrypt/PyJWT)
    │   └── unit/
    ├── reach_identity/        # Identity domain, services, OAuth clients
    │   ├── unit/
    │   └── integration/       # SQLAlchemy repository against SQLite
    └── reach_crm/             # HTTP surface and CLI
        ├── api/               # FastAPI TestClient against a temporary SQLite file
        ├── integration/       # Contact repository against SQLite
        └── unit/
"""

from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from reach_config import clear_settings_cache
from reach_identity.infrastructure.persistence.sqlalchemy.base import Base

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the test session with an empty settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Database fixtures (SQLite via aiosqlite)
# =============================================================================


@pytest.fixture
def async_engine(tmp_path):
    """Async engine on a throwaway SQLite file, one per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'reach-test.db'}",
        echo=False,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )
    return engine


@pytest_asyncio.fixture
async def db_session(async_engine):
    """
    Provide an isolated database session for each test.

    Creates all tables on a fresh database file, yields a session and
    rolls back anything left uncommitted.
    """
    # Import models to register them with Base.metadata
    import reach_crm.infrastructure.persistence.sqlalchemy.models  # noqa: F401
    import reach_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()

    await async_engine.dispose()
