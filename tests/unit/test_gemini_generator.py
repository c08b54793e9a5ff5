"""Tests for the Gemini text generation adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from todaybrief.core.domain.exceptions import GenerationFailedError
from todaybrief.core.infrastructure.ai import GeminiTextGenerator

pytestmark = pytest.mark.anyio


def _client(create: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = create
    client.close = AsyncMock()
    return client


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


async def test_generate_returns_completion_text() -> None:
    create = AsyncMock(return_value=_completion("안녕하세요"))
    generator = GeminiTextGenerator(openai_client=_client(create), model="gemini-test")

    assert await generator.generate("hi") == "안녕하세요"

    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


async def test_api_error_becomes_generation_failed() -> None:
    request = httpx.Request("POST", "https://example.invalid")
    create = AsyncMock(side_effect=openai.APIConnectionError(request=request))
    generator = GeminiTextGenerator(openai_client=_client(create))

    with pytest.raises(GenerationFailedError):
        await generator.generate("hi")


@pytest.mark.parametrize("response", [_completion(None), _completion("   "), SimpleNamespace(choices=[])])
async def test_empty_or_malformed_response_rejected(response) -> None:
    generator = GeminiTextGenerator(openai_client=_client(AsyncMock(return_value=response)))

    with pytest.raises(GenerationFailedError):
        await generator.generate("hi")


async def test_close_closes_injected_client() -> None:
    client = _client(AsyncMock())
    generator = GeminiTextGenerator(openai_client=client)

    await generator.close()

    client.close.assert_awaited_once()
