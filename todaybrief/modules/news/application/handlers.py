"""News command handlers."""

import time
from typing import Any

from loguru import logger

from todaybrief.core.config import settings
from todaybrief.core.domain.exceptions import ValidationError
from todaybrief.core.infrastructure.logging import BusinessEvents
from todaybrief.modules.news.application.commands import (
    ClearNewsCommand,
    CreateCommentCommand,
    SaveNewsBatchCommand,
)
from todaybrief.modules.news.domain.entities import News, NewsComment
from todaybrief.modules.news.domain.exceptions import (
    EmptyNewsBatchError,
    NewsNotFoundError,
)
from todaybrief.modules.news.domain.repository import (
    NewsCommentRepository,
    NewsRepository,
)


def _clean_text(value: Any, max_chars: int) -> str:
    """Trim and cap a submitted field; non-strings count as empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_chars]


def _parse_news_id(raw: str) -> int | None:
    try:
        news_id = int(raw)
    except ValueError:
        return None
    return news_id if news_id > 0 else None


class CreateCommentHandler:
    """Handle comment creation."""

    def __init__(
        self,
        news_repository: NewsRepository,
        comment_repository: NewsCommentRepository,
    ):
        self.news_repository = news_repository
        self.comment_repository = comment_repository
        self.logger = logger

    async def handle(self, command: CreateCommentCommand) -> NewsComment:
        """Validate the request, check the article and insert the comment."""
        raw_news_id = (command.news_id or "").strip()
        text = _clean_text(command.text, settings.COMMENT_TEXT_MAX_CHARS)
        if not raw_news_id or not text:
            raise ValidationError("newsId와 text는 필수입니다.")

        news_id = _parse_news_id(raw_news_id)
        if news_id is None or not await self.news_repository.exists(news_id):
            raise NewsNotFoundError(raw_news_id)

        nickname = _clean_text(command.nickname, settings.COMMENT_NICKNAME_MAX_CHARS)
        comment = NewsComment(
            news_id=news_id,
            nickname=nickname or None,
            comment_text=text,
        )
        created = await self.comment_repository.create(comment)

        BusinessEvents.comment_created(
            comment_id=created.id,
            news_id=news_id,
            has_nickname=created.nickname is not None,
        )
        return created


class SaveNewsBatchHandler:
    """Handle bulk article submission.

    The caller's session transaction spans the whole batch, so a failed
    insert leaves no rows behind.
    """

    def __init__(self, news_repository: NewsRepository):
        self.news_repository = news_repository
        self.logger = logger

    def clean(self, entries: Any) -> list[News]:
        """Drop non-objects and entries that are empty after trimming."""
        if not isinstance(entries, list):
            raise ValidationError("요청 본문은 JSON 배열이어야 합니다.")

        cleaned: list[News] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            title = _clean_text(entry.get("title"), settings.NEWS_TITLE_MAX_CHARS)
            content = _clean_text(
                entry.get("content"), settings.NEWS_CONTENT_MAX_CHARS
            )
            if not title and not content:
                continue
            cleaned.append(News(title=title, content=content))
        return cleaned

    async def handle(self, command: SaveNewsBatchCommand) -> list[News]:
        """Clean the payload and insert the survivors in order."""
        start = time.monotonic()
        news_list = self.clean(command.entries)
        if not news_list:
            raise EmptyNewsBatchError()

        saved = await self.news_repository.bulk_create(news_list)

        dropped = len(command.entries) - len(saved)
        BusinessEvents.news_batch_saved(
            saved=len(saved),
            dropped=dropped,
            first_id=saved[0].id,
        )
        self.logger.info(
            f"Saved {len(saved)} news articles ({dropped} dropped) "
            f"in {(time.monotonic() - start) * 1000:.0f}ms"
        )
        return saved


class ClearNewsHandler:
    """Handle removal of every article and comment."""

    def __init__(
        self,
        news_repository: NewsRepository,
        comment_repository: NewsCommentRepository,
    ):
        self.news_repository = news_repository
        self.comment_repository = comment_repository

    async def handle(self, command: ClearNewsCommand) -> int:
        """Delete comments first, then articles. Returns articles deleted."""
        await self.comment_repository.delete_all()
        deleted = await self.news_repository.delete_all()
        BusinessEvents.news_cleared(deleted=deleted)
        return deleted
