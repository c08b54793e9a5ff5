"""Chat and motor-command routes."""

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from todaybrief.core.domain.exceptions import GenerationFailedError
from todaybrief.modules.assistant.application.dependencies import (
    get_chat_service,
    get_motor_command_service,
)
from todaybrief.modules.assistant.application.services import (
    ChatService,
    MotorCommandService,
)
from todaybrief.modules.assistant.interfaces.schemas import (
    ChatResponse,
    MessageRequest,
    MotorCommandResponse,
)

router = APIRouter(tags=["assistant"])


@router.post("/api/chat", response_model=ChatResponse, summary="Chat passthrough")
async def chat(
    request: MessageRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    text = await service.chat(request.message)
    return ChatResponse(text=text)


async def _read_command_request(request: Request) -> MessageRequest:
    """Parse the /command body; an unusable body fails the command with 500."""
    try:
        return MessageRequest.model_validate(await request.json())
    except (ValueError, PydanticValidationError) as e:
        raise GenerationFailedError("명령을 해석할 수 없습니다.") from e


@router.post(
    "/command",
    response_model=MotorCommandResponse,
    summary="Interpret a spoken motor command",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": MessageRequest.model_json_schema()}
            },
        }
    },
)
async def interpret_command(
    request: MessageRequest = Depends(_read_command_request),
    service: MotorCommandService = Depends(get_motor_command_service),
) -> MotorCommandResponse:
    command = await service.interpret(request.message)
    return MotorCommandResponse(title=command.title, angle=command.angle)
