"""Health report for the generated content cache."""

from todaybrief.core.infrastructure.health import HealthStatus, TodayCacheHealthResult
from todaybrief.modules.today.application.cache import TodayCache


def check_today_cache_health(cache: TodayCache) -> TodayCacheHealthResult:
    """Degraded while any category is stale or has never been filled."""
    statuses = cache.status()
    stale = [s.category.value for s in statuses if s.stale]
    refreshed = [s.refreshed_at for s in statuses if s.refreshed_at is not None]

    return TodayCacheHealthResult(
        status=HealthStatus.DEGRADED if stale else HealthStatus.OK,
        stale_categories=stale,
        oldest_refresh_at=min(refreshed) if refreshed else None,
    )
