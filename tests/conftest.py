"""
pytest configuration and shared fixtures.

Test layout:
- unit/: no external services; the database is in-memory SQLite (aiosqlite)

Usage:
    pytest
    pytest tests/unit/
"""

import os

# Settings are built at import time and require a Gemini key.
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("TODAY_REFRESH_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "local")

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from todaybrief.core.infrastructure.database.session import session_scope  # noqa: E402
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore  # noqa: E402
from todaybrief.modules.news.infrastructure import models as _news_models  # noqa: E402,F401
from todaybrief.modules.today.application.cache import TodayCache  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# Generator Fixtures
# ============================================


@pytest.fixture
def fake_generator() -> MagicMock:
    """Text generator whose ``generate`` is an AsyncMock."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value='[{"title": "t", "content": "c"}]')
    generator.close = AsyncMock()
    return generator


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine; one shared connection keeps the data alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session rolled back after the test."""
    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
def kakao_gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.build_authorize_url = MagicMock(
        return_value="https://kauth.kakao.com/oauth/authorize?client_id=test"
    )
    gateway.exchange_code = AsyncMock(return_value="access-token")
    gateway.send_memo = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
async def app(test_engine, fake_generator, kakao_gateway):
    """The FastAPI app wired to the SQLite engine and fake collaborators.

    The lifespan is not run; ``app.state`` is populated here instead.
    """
    from main import app as fastapi_app
    from todaybrief.core.infrastructure.database.session import get_db_session

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async for session in session_scope(test_engine):
            yield session

    saved_overrides = dict(fastapi_app.dependency_overrides)
    fastapi_app.dependency_overrides[get_db_session] = _override_session

    fastapi_app.state.text_generator = fake_generator
    fastapi_app.state.chat_replies = ChatReplyStore()
    fastapi_app.state.kakao_client = kakao_gateway
    fastapi_app.state.today_cache = TodayCache(fake_generator)

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()
    fastapi_app.dependency_overrides.update(saved_overrides)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for API tests."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
