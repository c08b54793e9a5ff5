"""Assistant domain entities."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr


class MotorCommand(BaseModel):
    """Motor target parsed from an utterance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: StrictStr
    angle: StrictInt


class ChatReply(BaseModel):
    """A generated chat reply."""

    model_config = ConfigDict(frozen=True)

    text: str
    created_at: datetime
