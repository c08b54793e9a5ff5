"""Shared SQLModel bases for table models."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(UTC)


def timestamp_field() -> Any:
    """Non-null timezone-aware column defaulting to the current UTC time."""
    return Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )


class BaseModel(SQLModel):
    """Autoincrement integer key plus insertion time."""

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = timestamp_field()


class TimestampedModel(BaseModel):
    """Adds ``updated_at`` for rows that can change after insert."""

    updated_at: datetime = timestamp_field()
