"""Assistant module application dependencies."""

from fastapi import Depends, Request

from todaybrief.core.config import settings
from todaybrief.core.domain.ports.text_generator import TextGenerator
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore
from todaybrief.modules.assistant.application.services import (
    ChatService,
    MotorCommandService,
)


def get_text_generator(request: Request) -> TextGenerator:
    generator = getattr(request.app.state, "text_generator", None)
    if generator is None:
        raise RuntimeError("TextGenerator is not initialised; check the app lifespan")
    return generator


def get_chat_reply_store(request: Request) -> ChatReplyStore:
    store = getattr(request.app.state, "chat_replies", None)
    if store is None:
        raise RuntimeError("ChatReplyStore is not initialised; check the app lifespan")
    return store


def get_chat_service(
    generator: TextGenerator = Depends(get_text_generator),
    reply_store: ChatReplyStore = Depends(get_chat_reply_store),
) -> ChatService:
    return ChatService(
        generator=generator,
        reply_store=reply_store,
        instruction_suffix=settings.CHAT_INSTRUCTION_SUFFIX,
    )


def get_motor_command_service(
    generator: TextGenerator = Depends(get_text_generator),
) -> MotorCommandService:
    return MotorCommandService(generator)
