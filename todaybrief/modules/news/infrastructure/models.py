"""News database models."""

from sqlalchemy import Text
from sqlmodel import Field

from todaybrief.core.infrastructure.database.base_model import (
    BaseModel,
    TimestampedModel,
)


class NewsModel(TimestampedModel, table=True):
    """News article database model."""

    __tablename__ = "news"

    title: str = Field(default="", nullable=False, max_length=200)
    content: str = Field(default="", sa_type=Text, nullable=False)


class NewsCommentModel(BaseModel, table=True):
    """News comment database model."""

    __tablename__ = "news_comments"

    news_id: int = Field(foreign_key="news.id", nullable=False, index=True)
    nickname: str | None = Field(default=None, max_length=30)
    comment_text: str = Field(sa_type=Text, nullable=False)
