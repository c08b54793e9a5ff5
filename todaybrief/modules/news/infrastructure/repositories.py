"""News repository implementations."""

from collections import defaultdict

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from todaybrief.modules.news.domain.entities import News, NewsComment
from todaybrief.modules.news.domain.repository import (
    NewsCommentRepository,
    NewsRepository,
)
from todaybrief.modules.news.infrastructure.mappers import (
    NewsCommentMapper,
    NewsMapper,
)
from todaybrief.modules.news.infrastructure.models import NewsCommentModel, NewsModel


class PostgreSQLNewsRepository(NewsRepository):
    """PostgreSQL news repository implementation."""

    def __init__(self, session: AsyncSession, mapper: NewsMapper):
        self.session = session
        self.mapper = mapper
        self.logger = logger

    async def get_by_id(self, news_id: int) -> News | None:
        statement = select(NewsModel).where(NewsModel.id == news_id)
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        return self.mapper.to_domain(model) if model else None

    async def exists(self, news_id: int) -> bool:
        statement = select(NewsModel.id).where(NewsModel.id == news_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def list_recent(self, limit: int) -> list[News]:
        statement = (
            select(NewsModel)
            .order_by(col(NewsModel.created_at).desc(), col(NewsModel.id).desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        models = result.scalars().all()
        return self.mapper.to_domain_list(list(models))

    async def create(self, news: News) -> News:
        model = self.mapper.to_model(news)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self.mapper.to_domain(model)

    async def bulk_create(self, news_list: list[News]) -> list[News]:
        # One INSERT per article so ids come back in submission order.
        models: list[NewsModel] = []
        for news in news_list:
            model = self.mapper.to_model(news)
            self.session.add(model)
            await self.session.flush()
            models.append(model)

        self.logger.debug(f"Inserted {len(models)} news rows (pending commit)")
        return self.mapper.to_domain_list(models)

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(NewsModel))
        return result.rowcount or 0


class PostgreSQLNewsCommentRepository(NewsCommentRepository):
    """PostgreSQL news comment repository implementation."""

    def __init__(self, session: AsyncSession, mapper: NewsCommentMapper):
        self.session = session
        self.mapper = mapper

    async def get_by_id(self, comment_id: int) -> NewsComment | None:
        statement = select(NewsCommentModel).where(NewsCommentModel.id == comment_id)
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        return self.mapper.to_domain(model) if model else None

    async def create(self, comment: NewsComment) -> NewsComment:
        model = self.mapper.to_model(comment)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self.mapper.to_domain(model)

    async def list_by_news_ids(
        self, news_ids: list[int]
    ) -> dict[int, list[NewsComment]]:
        if not news_ids:
            return {}

        statement = (
            select(NewsCommentModel)
            .where(col(NewsCommentModel.news_id).in_(news_ids))
            .order_by(col(NewsCommentModel.created_at).asc(), col(NewsCommentModel.id).asc())
        )
        result = await self.session.execute(statement)

        grouped: dict[int, list[NewsComment]] = defaultdict(list)
        for model in result.scalars().all():
            grouped[model.news_id].append(self.mapper.to_domain(model))
        return dict(grouped)

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(NewsCommentModel))
        return result.rowcount or 0
