"""News entity-model mappers."""

from todaybrief.modules.news.domain.entities import News, NewsComment
from todaybrief.modules.news.infrastructure.models import NewsCommentModel, NewsModel


class NewsMapper:
    """News entity-model mapper."""

    def to_domain(self, model: NewsModel) -> News:
        return News(
            id=model.id,
            title=model.title,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def to_model(self, entity: News) -> NewsModel:
        return NewsModel(
            id=entity.id,
            title=entity.title,
            content=entity.content,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_domain_list(self, models: list[NewsModel]) -> list[News]:
        return [self.to_domain(model) for model in models]


class NewsCommentMapper:
    """News comment entity-model mapper."""

    def to_domain(self, model: NewsCommentModel) -> NewsComment:
        return NewsComment(
            id=model.id,
            news_id=model.news_id,
            nickname=model.nickname,
            comment_text=model.comment_text,
            created_at=model.created_at,
        )

    def to_model(self, entity: NewsComment) -> NewsCommentModel:
        return NewsCommentModel(
            id=entity.id,
            news_id=entity.news_id,
            nickname=entity.nickname,
            comment_text=entity.comment_text,
            created_at=entity.created_at,
        )

    def to_domain_list(self, models: list[NewsCommentModel]) -> list[NewsComment]:
        return [self.to_domain(model) for model in models]
