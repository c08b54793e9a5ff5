"""News application services."""

from loguru import logger

from todaybrief.core.config import settings
from todaybrief.modules.news.application.models import (
    CommentCommandData,
    CommentData,
    NewsData,
    TodayNewsData,
)
from todaybrief.modules.news.domain.entities import News, NewsComment
from todaybrief.modules.news.domain.repository import (
    NewsCommentRepository,
    NewsRepository,
)


def _comment_command(news_id: int) -> CommentCommandData:
    return CommentCommandData(
        body={"newsId": str(news_id), "text": "", "nickname": ""},
    )


def to_comment_data(comment: NewsComment) -> CommentData:
    return CommentData(
        id=comment.id or 0,
        news_id=comment.news_id,
        text=comment.display_text,
        created_at=comment.created_at,
    )


class NewsQueryService:
    """Query service for articles and their comments."""

    def __init__(
        self,
        news_repository: NewsRepository,
        comment_repository: NewsCommentRepository,
    ) -> None:
        self.news_repo = news_repository
        self.comment_repo = comment_repository
        self.logger = logger.bind(service="NewsQueryService")

    async def list_today_news(self) -> list[TodayNewsData]:
        """Latest articles, newest first, each with comments oldest first."""
        news_list = await self.news_repo.list_recent(settings.NEWS_TODAY_LIMIT)
        news_ids = [news.id for news in news_list if news.id is not None]
        comments = await self.comment_repo.list_by_news_ids(news_ids)

        return [
            TodayNewsData(
                id=news.id or 0,
                title=news.title,
                content=news.content,
                comments=[
                    to_comment_data(c) for c in comments.get(news.id or 0, [])
                ],
                command=_comment_command(news.id or 0),
            )
            for news in news_list
        ]

    async def list_recent(self, limit: int | None = None) -> list[NewsData]:
        """Plain listing; ``limit`` defaults and is capped by settings."""
        if limit is None or limit <= 0:
            limit = settings.NEWS_LIST_DEFAULT_LIMIT
        limit = min(limit, settings.NEWS_LIST_MAX_LIMIT)

        news_list = await self.news_repo.list_recent(limit)
        return [self._to_news_data(news) for news in news_list]

    @staticmethod
    def _to_news_data(news: News) -> NewsData:
        return NewsData(
            id=news.id or 0,
            title=news.title,
            content=news.content,
            created_at=news.created_at,
        )
