"""Today API routes (generated content cache)."""

from fastapi import APIRouter, Depends

from todaybrief.modules.today.application.cache import TodayCache
from todaybrief.modules.today.application.dependencies import get_today_cache
from todaybrief.modules.today.domain.entities import Category, CategoryStatus
from todaybrief.modules.today.interfaces.schemas import (
    CategoryStatusResponse,
    ContentItemResponse,
    RefreshAttemptResponse,
)

router = APIRouter(prefix="/today", tags=["today"])


def _to_status_response(status: CategoryStatus) -> CategoryStatusResponse:
    attempt = status.last_attempt
    return CategoryStatusResponse(
        category=status.category.value,
        item_count=status.item_count,
        refreshed_at=status.refreshed_at,
        stale=status.stale,
        last_attempt=(
            RefreshAttemptResponse(
                attempted_at=attempt.attempted_at,
                succeeded=attempt.succeeded,
                error=attempt.error,
            )
            if attempt
            else None
        ),
    )


@router.get(
    "",
    response_model=list[CategoryStatusResponse],
    summary="Cache freshness per category",
)
async def get_today_status(
    cache: TodayCache = Depends(get_today_cache),
) -> list[CategoryStatusResponse]:
    return [_to_status_response(status) for status in cache.status()]


@router.get(
    "/news/generated",
    response_model=list[ContentItemResponse],
    summary="Generated news snapshot",
)
async def get_generated_news(
    cache: TodayCache = Depends(get_today_cache),
) -> list[ContentItemResponse]:
    """The database-backed ``/today/news`` shadows the cached news category."""
    return [ContentItemResponse(**item.model_dump()) for item in cache.read(Category.NEWS)]


@router.get(
    "/{category}",
    response_model=list[ContentItemResponse],
    summary="Cached items for a category",
)
async def get_today_category(
    category: str,
    cache: TodayCache = Depends(get_today_cache),
) -> list[ContentItemResponse]:
    """Never blocks on a refresh; unknown or empty categories return []."""
    return [ContentItemResponse(**item.model_dump()) for item in cache.read(category)]
