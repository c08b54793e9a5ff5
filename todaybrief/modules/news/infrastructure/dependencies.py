"""News module infrastructure dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todaybrief.core.infrastructure.database.session import get_db_session
from todaybrief.modules.news.infrastructure.mappers import (
    NewsCommentMapper,
    NewsMapper,
)
from todaybrief.modules.news.infrastructure.repositories import (
    PostgreSQLNewsCommentRepository,
    PostgreSQLNewsRepository,
)


def get_news_mapper() -> NewsMapper:
    return NewsMapper()


def get_news_comment_mapper() -> NewsCommentMapper:
    return NewsCommentMapper()


async def get_news_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: NewsMapper = Depends(get_news_mapper),
) -> PostgreSQLNewsRepository:
    return PostgreSQLNewsRepository(session, mapper)


async def get_news_comment_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: NewsCommentMapper = Depends(get_news_comment_mapper),
) -> PostgreSQLNewsCommentRepository:
    return PostgreSQLNewsCommentRepository(session, mapper)
