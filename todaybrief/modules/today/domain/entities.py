"""Today cache domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, StrictStr


class Category(str, Enum):
    """Cached content categories."""

    LUCK = "luck"
    JOKES = "jokes"
    STOCKS = "stocks"
    NEWS = "news"

    @classmethod
    def parse(cls, value: "str | Category") -> "Category | None":
        """Return the matching category, or None for an unknown tag."""
        if isinstance(value, Category):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ContentItem(BaseModel):
    """One generated entry; exactly a string title and a string content."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: StrictStr
    content: StrictStr


@dataclass(frozen=True)
class CategorySnapshot:
    """Items installed by one successful refresh. Replaced, never mutated."""

    category: Category
    items: tuple[ContentItem, ...] = ()
    refreshed_at: datetime | None = None


@dataclass(frozen=True)
class RefreshAttempt:
    """Outcome of the latest refresh attempt for a category."""

    category: Category
    attempted_at: datetime
    succeeded: bool
    error: str | None = None


@dataclass(frozen=True)
class CategoryStatus:
    """Freshness view of one category."""

    category: Category
    item_count: int
    refreshed_at: datetime | None
    stale: bool
    last_attempt: RefreshAttempt | None = field(default=None)
