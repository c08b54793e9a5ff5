"""Health check result types shared by infrastructure components."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    OK = "ok"
    ERROR = "error"
    DEGRADED = "degraded"


class DatabaseHealthResult(BaseModel):
    """Database health check result."""

    status: HealthStatus = Field(..., description="Health status")
    connected: bool = Field(..., description="Whether a connection succeeded")
    version: str | None = Field(None, description="Server version")
    error: str | None = Field(None, description="Error message")

    def to_dict(self) -> dict[str, str | bool | None]:
        return self.model_dump(mode="json", exclude_none=False)


class TodayCacheHealthResult(BaseModel):
    """Freshness of the generated content cache."""

    status: HealthStatus = Field(..., description="ok when nothing is stale")
    stale_categories: list[str] = Field(default_factory=list)
    oldest_refresh_at: datetime | None = Field(None)

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=False)
