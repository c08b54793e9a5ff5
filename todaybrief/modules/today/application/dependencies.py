"""Today module application dependencies.

The cache is created once in the application lifespan and kept on
``app.state``; handlers receive it through this dependency.
"""

from fastapi import Request

from todaybrief.modules.today.application.cache import TodayCache


def get_today_cache(request: Request) -> TodayCache:
    cache = getattr(request.app.state, "today_cache", None)
    if cache is None:
        raise RuntimeError("TodayCache is not initialised; check the app lifespan")
    return cache
