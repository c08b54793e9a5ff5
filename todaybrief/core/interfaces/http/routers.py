"""API router configuration."""

from fastapi import APIRouter

from todaybrief.modules.admin.interfaces.router import router as admin_router
from todaybrief.modules.assistant.interfaces.router import router as assistant_router
from todaybrief.modules.kakao.interfaces.router import router as kakao_router
from todaybrief.modules.news.interfaces.router import router as news_router
from todaybrief.modules.today.interfaces.router import router as today_router

api_router = APIRouter()

# News must precede today: GET /today/news would otherwise match /today/{category}
api_router.include_router(news_router)

# Generated content cache
api_router.include_router(today_router)

# Gemini chat and motor commands
api_router.include_router(assistant_router)

# Kakao OAuth
api_router.include_router(kakao_router)

# Admin panel
api_router.include_router(admin_router)
