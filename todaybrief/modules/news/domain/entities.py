"""News domain entities."""

from datetime import datetime

from pydantic import Field

from todaybrief.core.domain.base_entity import BaseEntity, utc_now


class News(BaseEntity):
    """A user-submitted article."""

    title: str = Field(default="", description="Trimmed, length-capped title")
    content: str = Field(default="", description="Trimmed, length-capped body")
    updated_at: datetime = Field(default_factory=utc_now)


class NewsComment(BaseEntity):
    """A comment attached to an article."""

    news_id: int = Field(..., description="Referenced article id")
    nickname: str | None = Field(default=None, description="Optional author name")
    comment_text: str = Field(..., description="Comment body")

    @property
    def display_text(self) -> str:
        """Text as shown to readers: ``"<nickname>: <text>"`` when named."""
        if self.nickname:
            return f"{self.nickname}: {self.comment_text}"
        return self.comment_text
