"""Gemini text generation adapter.

Gemini exposes an OpenAI-compatible chat completions endpoint, so the adapter
drives it with the ``openai`` async client.
"""

import time

import openai
from loguru import logger
from openai import AsyncOpenAI

from todaybrief.core.config import settings
from todaybrief.core.domain.exceptions import GenerationFailedError


class GeminiTextGenerator:
    """Single-shot prompt -> completion calls. No retries, no streaming."""

    def __init__(
        self,
        openai_client: AsyncOpenAI | None = None,
        model: str | None = None,
    ) -> None:
        self._client = openai_client
        self._model = model or settings.GEMINI_MODEL

    @property
    def client(self) -> AsyncOpenAI:
        """Lazily build the client so tests can inject their own."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=settings.GEMINI_API_KEY,
                base_url=settings.GEMINI_API_BASE,
                timeout=settings.GEMINI_TIMEOUT_SEC,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        start = time.monotonic()
        try:
            response = await self.client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            logger.warning(f"Gemini call failed: {type(e).__name__}: {e}")
            raise GenerationFailedError(f"Generation request failed: {type(e).__name__}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise GenerationFailedError("Malformed generation response") from e

        if not content or not content.strip():
            raise GenerationFailedError("Empty generation response")

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.debug(f"Gemini completion received in {latency_ms}ms ({len(content)} chars)")
        return content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
