"""Today API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentItemResponse(BaseModel):
    title: str
    content: str


class RefreshAttemptResponse(_CamelModel):
    attempted_at: datetime
    succeeded: bool
    error: str | None = None


class CategoryStatusResponse(_CamelModel):
    category: str
    item_count: int = Field(..., ge=0)
    refreshed_at: datetime | None = None
    stale: bool
    last_attempt: RefreshAttemptResponse | None = None
