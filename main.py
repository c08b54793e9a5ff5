"""todaybrief backend entry point."""

from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from todaybrief.core.config import settings
from todaybrief.core.domain.exceptions import DomainException, UpstreamAuthError
from todaybrief.core.infrastructure.ai import GeminiTextGenerator
from todaybrief.core.infrastructure.database.session import (
    check_db_health,
    close_db,
    init_db,
)
from todaybrief.core.infrastructure.logging import BusinessEvents, setup_logging
from todaybrief.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
    request_validation_exception_handler,
    sqlalchemy_exception_handler,
    upstream_auth_exception_handler,
)
from todaybrief.core.interfaces.http.routers import api_router
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore
from todaybrief.modules.kakao.infrastructure.client import KakaoClient
from todaybrief.modules.news.application import dependencies as news_app_deps
from todaybrief.modules.news.infrastructure import dependencies as news_infra_deps
from todaybrief.modules.today.application.cache import TodayCache
from todaybrief.modules.today.application.scheduler import TodayRefreshScheduler
from todaybrief.modules.today.infrastructure.health import check_today_cache_health

VERSION = "0.1.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Owns the generator, the reply store, the Kakao client, the today cache and
    its refresh scheduler; all of them are published on ``app.state``.
    """
    setup_logging()
    logger.info("Starting todaybrief backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    logger.info("Initializing database connection...")
    await init_db()

    generator = GeminiTextGenerator()
    kakao_client = KakaoClient()
    cache = TodayCache(
        generator,
        stale_after=timedelta(seconds=settings.TODAY_STALE_AFTER_SEC),
    )
    app.state.text_generator = generator
    app.state.chat_replies = ChatReplyStore()
    app.state.kakao_client = kakao_client
    app.state.today_cache = cache

    scheduler: TodayRefreshScheduler | None = None
    if settings.TODAY_REFRESH_ENABLED:
        scheduler = TodayRefreshScheduler(
            cache,
            interval_seconds=settings.TODAY_REFRESH_INTERVAL_SEC,
            startup_timeout_seconds=settings.TODAY_STARTUP_REFRESH_TIMEOUT_SEC,
        )
        await scheduler.start()
    else:
        BusinessEvents.today_refresh_skipped(reason="disabled")

    yield

    logger.info("Shutting down todaybrief backend...")
    if scheduler is not None:
        await scheduler.shutdown()
    await kakao_client.close()
    await generator.close()
    await close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "Gemini 기반 오늘의 콘텐츠, 뉴스/댓글 저장소, 카카오 메시지 전송 게이트웨이"
    ),
    version=VERSION,
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[news_app_deps.get_news_repository] = (
    news_infra_deps.get_news_repository
)
app.dependency_overrides[news_app_deps.get_news_comment_repository] = (
    news_infra_deps.get_news_comment_repository
)

# Exception handlers; the most specific class wins
app.add_exception_handler(UpstreamAuthError, upstream_auth_exception_handler)
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Session cookie holds the Kakao access token
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.ENVIRONMENT != "local",
)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router)


@app.get("/health", tags=["health"])
async def health_check(request: Request):
    """Health check endpoint.

    - healthy: database reachable and every category fresh
    - degraded: database reachable but some category stale or empty
    - unhealthy: database unreachable
    """
    db_health_result = await check_db_health()
    db_ok = db_health_result.status.value == "ok"

    components = {"database": db_health_result.to_dict()}

    cache_ok = True
    cache = getattr(request.app.state, "today_cache", None)
    if cache is not None:
        cache_health_result = check_today_cache_health(cache)
        cache_ok = cache_health_result.status.value == "ok"
        components["today_cache"] = cache_health_result.to_dict()

    if db_ok and cache_ok:
        overall_status = "healthy"
    elif db_ok:
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "version": VERSION,
        "components": components,
        "feature_flags": {
            "today_refresh_enabled": settings.TODAY_REFRESH_ENABLED,
            "kakao_configured": bool(settings.KAKAO_REST_API_KEY),
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to todaybrief API",
        "docs": "/docs",
        "admin": "/admin",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
