"""Tests for the today content cache."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from todaybrief.core.domain.exceptions import GenerationFailedError
from todaybrief.modules.today.application.cache import TodayCache
from todaybrief.modules.today.application.prompts import build_category_prompt
from todaybrief.modules.today.domain.entities import Category, ContentItem

pytestmark = pytest.mark.anyio

VALID_OUTPUT = '```json\n[{"title": "쥐띠", "content": "좋은 하루"}]\n```'


def _generator(*outputs) -> MagicMock:
    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=list(outputs))
    return generator


async def test_read_before_any_refresh_is_empty() -> None:
    cache = TodayCache(_generator())
    for category in Category:
        assert cache.read(category) == []


async def test_unknown_category_reads_empty() -> None:
    cache = TodayCache(_generator())
    assert cache.read("weather") == []


async def test_successful_refresh_installs_snapshot() -> None:
    generator = _generator(VALID_OUTPUT)
    cache = TodayCache(generator, categories=(Category.LUCK,))

    assert await cache.refresh_one(Category.LUCK) is True

    assert cache.read("luck") == [ContentItem(title="쥐띠", content="좋은 하루")]
    generator.generate.assert_awaited_once_with(build_category_prompt(Category.LUCK))
    attempt = cache.last_attempt(Category.LUCK)
    assert attempt is not None and attempt.succeeded


@pytest.mark.parametrize(
    "bad_output",
    [
        "not json",
        "[]",
        '{"title": "a", "content": "b"}',
        '[{"title": "a", "content": "b", "score": 3}]',
    ],
)
async def test_unparseable_output_keeps_previous_snapshot(bad_output: str) -> None:
    cache = TodayCache(_generator(VALID_OUTPUT, bad_output), categories=(Category.JOKES,))
    await cache.refresh_one(Category.JOKES)
    before = cache.read(Category.JOKES)

    assert await cache.refresh_one(Category.JOKES) is False

    assert cache.read(Category.JOKES) == before
    attempt = cache.last_attempt(Category.JOKES)
    assert attempt is not None
    assert attempt.succeeded is False
    assert attempt.error


async def test_generator_error_is_absorbed() -> None:
    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=GenerationFailedError("upstream down"))
    cache = TodayCache(generator, categories=(Category.STOCKS,))

    assert await cache.refresh_one(Category.STOCKS) is False
    assert cache.read(Category.STOCKS) == []


async def test_unexpected_error_is_absorbed() -> None:
    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=RuntimeError("boom"))
    cache = TodayCache(generator, categories=(Category.NEWS,))

    assert await cache.refresh_one(Category.NEWS) is False
    assert "RuntimeError" in (cache.last_attempt(Category.NEWS).error or "")


async def test_refresh_all_isolates_category_failures() -> None:
    async def generate(prompt: str) -> str:
        if prompt == build_category_prompt(Category.STOCKS):
            raise GenerationFailedError("quota")
        return VALID_OUTPUT

    generator = MagicMock()
    generator.generate = AsyncMock(side_effect=generate)
    cache = TodayCache(generator)

    outcome = await cache.refresh_all()

    assert outcome[Category.STOCKS] is False
    assert all(outcome[c] for c in Category if c is not Category.STOCKS)
    assert cache.read(Category.STOCKS) == []
    assert len(cache.read(Category.LUCK)) == 1


async def test_status_marks_empty_and_old_snapshots_stale() -> None:
    cache = TodayCache(
        _generator(VALID_OUTPUT),
        categories=(Category.LUCK, Category.JOKES),
        stale_after=timedelta(hours=3),
    )
    await cache.refresh_one(Category.LUCK)

    now = datetime.now(UTC)
    fresh = {s.category: s for s in cache.status(now)}
    assert fresh[Category.LUCK].stale is False
    assert fresh[Category.LUCK].item_count == 1
    assert fresh[Category.JOKES].stale is True

    later = {s.category: s for s in cache.status(now + timedelta(hours=4))}
    assert later[Category.LUCK].stale is True
