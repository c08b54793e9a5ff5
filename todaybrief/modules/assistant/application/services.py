"""Chat passthrough and motor-command interpretation."""

from loguru import logger

from todaybrief.core.application.output_parsing import (
    ContentParseError,
    parse_single_item,
)
from todaybrief.core.domain.exceptions import GenerationFailedError, ValidationError
from todaybrief.core.domain.ports.text_generator import TextGenerator
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore
from todaybrief.modules.assistant.domain.entities import MotorCommand
from todaybrief.modules.today.application.prompts import build_motor_prompt


class ChatService:
    """Forward a user message, with a fixed instruction suffix, to the generator."""

    def __init__(
        self,
        generator: TextGenerator,
        reply_store: ChatReplyStore,
        instruction_suffix: str,
    ) -> None:
        self._generator = generator
        self._reply_store = reply_store
        self._instruction_suffix = instruction_suffix

    async def chat(self, message: str) -> str:
        if not message:
            raise ValidationError("message 필드에 문자열을 보내줘야 합니다.")

        text = await self._generator.generate(f"{message}{self._instruction_suffix}")
        self._reply_store.remember(text)
        return text


class MotorCommandService:
    """Single-shot interpretation of an utterance into a MotorCommand.

    Unlike the today cache, failures are raised to the caller.
    """

    def __init__(self, generator: TextGenerator) -> None:
        self._generator = generator

    async def interpret(self, message: str) -> MotorCommand:
        raw = await self._generator.generate(build_motor_prompt(message))
        logger.debug(f"Motor interpreter raw output: {raw!r}")
        try:
            return parse_single_item(raw, MotorCommand)
        except ContentParseError as e:
            raise GenerationFailedError(f"Unusable motor command output: {e}") from e
