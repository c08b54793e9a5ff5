"""News application data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CommentData(BaseModel):
    """Comment as shown to readers."""

    id: int
    news_id: int
    text: str
    created_at: datetime


class CommentCommandData(BaseModel):
    """How a client posts a comment on an article."""

    method: str = "POST"
    path: str = "/today/news/comments"
    body: dict[str, Any] = Field(default_factory=dict)


class TodayNewsData(BaseModel):
    """Article with its comments and the comment command."""

    id: int
    title: str
    content: str
    comments: list[CommentData] = Field(default_factory=list)
    command: CommentCommandData


class NewsData(BaseModel):
    """Article summary for the plain listing."""

    id: int
    title: str
    content: str
    created_at: datetime
