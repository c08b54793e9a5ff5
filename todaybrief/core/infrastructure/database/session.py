"""Database engine and per-request sessions."""

from collections.abc import AsyncGenerator

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

from todaybrief.core.config import settings
from todaybrief.core.infrastructure.health import DatabaseHealthResult, HealthStatus

async_engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=False,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)


async def session_scope(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield one session wrapped in a transaction.

    Commits when the consumer finishes, rolls back when it raises, and always
    returns the connection to the pool.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        async with session.begin():
            yield session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; every repository in a request shares it."""
    async for session in session_scope(async_engine):
        yield session


async def init_db(engine: AsyncEngine = async_engine) -> None:
    """Check connectivity and, when enabled, create missing tables."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if settings.DB_CREATE_TABLES:
                await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"Database ready ({engine.dialect.name})")
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


async def close_db(engine: AsyncEngine = async_engine) -> None:
    await engine.dispose()


async def check_db_health(engine: AsyncEngine = async_engine) -> DatabaseHealthResult:
    """Round-trip a trivial query and report the server version."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            version_info = conn.dialect.server_version_info
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return DatabaseHealthResult(
            status=HealthStatus.ERROR,
            connected=False,
            error=str(e),
        )

    version = ".".join(str(part) for part in version_info) if version_info else None
    return DatabaseHealthResult(
        status=HealthStatus.OK,
        connected=True,
        version=f"{engine.dialect.name} {version}" if version else engine.dialect.name,
    )
