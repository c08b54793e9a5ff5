"""Kakao module application dependencies."""

from fastapi import Depends, Request

from todaybrief.core.config import settings
from todaybrief.modules.assistant.application.dependencies import (
    get_chat_reply_store,
)
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore
from todaybrief.modules.kakao.application.service import KakaoMessageService
from todaybrief.modules.kakao.domain.ports import KakaoGateway


def get_kakao_gateway(request: Request) -> KakaoGateway:
    gateway = getattr(request.app.state, "kakao_client", None)
    if gateway is None:
        raise RuntimeError("Kakao client is not initialised; check the app lifespan")
    return gateway


def get_kakao_message_service(
    gateway: KakaoGateway = Depends(get_kakao_gateway),
    reply_store: ChatReplyStore = Depends(get_chat_reply_store),
) -> KakaoMessageService:
    return KakaoMessageService(
        gateway=gateway,
        reply_store=reply_store,
        default_message=settings.KAKAO_DEFAULT_MESSAGE,
    )
