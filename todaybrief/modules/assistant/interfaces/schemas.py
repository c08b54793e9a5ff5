"""Assistant API schemas."""

from pydantic import BaseModel, Field, StrictStr


class MessageRequest(BaseModel):
    message: StrictStr = Field(..., description="User utterance or question")


class ChatResponse(BaseModel):
    text: str


class MotorCommandResponse(BaseModel):
    title: str
    angle: int
