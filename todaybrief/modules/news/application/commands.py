"""News application commands."""

from typing import Any

from pydantic import BaseModel


class CreateCommentCommand(BaseModel):
    """Attach a comment to an article.

    ``news_id`` is kept as submitted so the response can echo it unchanged.
    """

    news_id: str | None = None
    text: str | None = None
    nickname: str | None = None


class SaveNewsBatchCommand(BaseModel):
    """Store a batch of articles; ``entries`` is the raw decoded JSON body."""

    entries: Any


class ClearNewsCommand(BaseModel):
    """Delete every article and comment."""
