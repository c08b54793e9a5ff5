"""Kakao OAuth routes."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from todaybrief.modules.kakao.application.dependencies import (
    get_kakao_message_service,
)
from todaybrief.modules.kakao.application.service import KakaoMessageService

router = APIRouter(tags=["kakao"])

SESSION_TOKEN_KEY = "kakao_access_token"

SUCCESS_PAGE = (
    "<!doctype html><html><head><meta charset='utf-8'></head>"
    "<body><h2>카카오 메시지 전송 성공!</h2></body></html>"
)


@router.get("/login/kakao", summary="Start Kakao login")
async def login_kakao(
    request: Request,
    service: KakaoMessageService = Depends(get_kakao_message_service),
) -> RedirectResponse:
    request.session.pop(SESSION_TOKEN_KEY, None)
    return RedirectResponse(service.authorize_url())


@router.get(
    "/oauth/kakao/callback",
    response_class=HTMLResponse,
    summary="Kakao OAuth callback",
)
async def kakao_callback(
    request: Request,
    code: str | None = Query(default=None),
    service: KakaoMessageService = Depends(get_kakao_message_service),
) -> HTMLResponse:
    access_token = await service.exchange_code(code)
    request.session[SESSION_TOKEN_KEY] = access_token
    await service.send_latest_reply(access_token)
    return HTMLResponse(SUCCESS_PAGE)
