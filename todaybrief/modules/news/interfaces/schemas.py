"""News API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateCommentRequest(_CamelModel):
    """Comment submission; presence and blankness are checked by the handler."""

    news_id: str | int | None = None
    text: str | None = None
    nickname: str | None = None


class CommentResponse(_CamelModel):
    id: int
    news_id: str
    text: str
    created_at: datetime


class CreateCommentResponse(BaseModel):
    ok: bool = True
    comment: CommentResponse


class CommentCommandResponse(BaseModel):
    method: str
    path: str
    body: dict[str, Any] = Field(default_factory=dict)


class TodayNewsResponse(BaseModel):
    id: int
    title: str
    content: str
    comments: list[CommentResponse]
    command: CommentCommandResponse


class NewsResponse(_CamelModel):
    id: int
    title: str
    content: str
    created_at: datetime


class SaveNewsResponse(_CamelModel):
    ok: bool = True
    saved: int
    first_id: int | None = None


class ClearNewsResponse(BaseModel):
    ok: bool = True
    deleted: int
