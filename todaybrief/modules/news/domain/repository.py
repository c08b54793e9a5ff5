"""News repository interfaces."""

from abc import abstractmethod

from todaybrief.core.domain.repository import BaseRepository
from todaybrief.modules.news.domain.entities import News, NewsComment


class NewsRepository(BaseRepository[News]):
    """News repository interface."""

    @abstractmethod
    async def exists(self, news_id: int) -> bool:
        """Whether an article with this id exists."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> list[News]:
        """Most recent articles first."""
        pass

    @abstractmethod
    async def bulk_create(self, news_list: list[News]) -> list[News]:
        """Insert all articles in order; any failure must abort the whole batch.

        Callers run this inside one transaction.
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every article. Returns count deleted."""
        pass


class NewsCommentRepository(BaseRepository[NewsComment]):
    """News comment repository interface."""

    @abstractmethod
    async def list_by_news_ids(
        self, news_ids: list[int]
    ) -> dict[int, list[NewsComment]]:
        """Comments grouped by article id, oldest first.

        Args:
            news_ids: Article ids to fetch comments for

        Returns:
            Dict mapping news_id -> comments; articles without comments are absent
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every comment. Returns count deleted."""
        pass
