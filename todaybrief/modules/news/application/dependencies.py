"""News module application dependencies.

Repositories are bound to infrastructure in ``main.py`` through
``app.dependency_overrides``; this module never imports infrastructure.
"""

from typing import NoReturn

from fastapi import Depends

from todaybrief.modules.news.application.handlers import (
    ClearNewsHandler,
    CreateCommentHandler,
    SaveNewsBatchHandler,
)
from todaybrief.modules.news.application.services import NewsQueryService
from todaybrief.modules.news.domain.repository import (
    NewsCommentRepository,
    NewsRepository,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_news_repository() -> NewsRepository:
    _missing_dependency("NewsRepository")


async def get_news_comment_repository() -> NewsCommentRepository:
    _missing_dependency("NewsCommentRepository")


async def get_news_query_service(
    news_repository: NewsRepository = Depends(get_news_repository),
    comment_repository: NewsCommentRepository = Depends(get_news_comment_repository),
) -> NewsQueryService:
    return NewsQueryService(news_repository, comment_repository)


async def get_create_comment_handler(
    news_repository: NewsRepository = Depends(get_news_repository),
    comment_repository: NewsCommentRepository = Depends(get_news_comment_repository),
) -> CreateCommentHandler:
    return CreateCommentHandler(news_repository, comment_repository)


async def get_save_news_batch_handler(
    news_repository: NewsRepository = Depends(get_news_repository),
) -> SaveNewsBatchHandler:
    return SaveNewsBatchHandler(news_repository)


async def get_clear_news_handler(
    news_repository: NewsRepository = Depends(get_news_repository),
    comment_repository: NewsCommentRepository = Depends(get_news_comment_repository),
) -> ClearNewsHandler:
    return ClearNewsHandler(news_repository, comment_repository)
