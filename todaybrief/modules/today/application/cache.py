"""Periodically refreshed cache of generated "today" content.

Each category holds one immutable CategorySnapshot. A refresh builds the
category prompt, calls the text generator, parses the output strictly and, only
on success, swaps the snapshot in with a single assignment. Readers therefore
see either the previous complete snapshot or the new one.

Refresh failures never leave this class: they are logged, recorded on the
per-category attempt marker, and the previous snapshot stays in place.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from loguru import logger

from todaybrief.core.application.output_parsing import (
    ContentParseError,
    parse_item_list,
)
from todaybrief.core.domain.exceptions import GenerationFailedError
from todaybrief.core.domain.ports.text_generator import TextGenerator
from todaybrief.core.infrastructure.logging import BusinessEvents
from todaybrief.modules.today.application.prompts import build_category_prompt
from todaybrief.modules.today.domain.entities import (
    Category,
    CategorySnapshot,
    CategoryStatus,
    ContentItem,
    RefreshAttempt,
)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TodayCache:
    """Owns one snapshot per category and the refresh protocol."""

    def __init__(
        self,
        generator: TextGenerator,
        categories: Iterable[Category] = tuple(Category),
        stale_after: timedelta | None = None,
    ) -> None:
        self._generator = generator
        self._categories: tuple[Category, ...] = tuple(categories)
        self._stale_after = stale_after
        self._snapshots: dict[Category, CategorySnapshot] = {
            category: CategorySnapshot(category=category)
            for category in self._categories
        }
        self._attempts: dict[Category, RefreshAttempt] = {}

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def read(self, category: Category | str) -> list[ContentItem]:
        """Current items for ``category``; ``[]`` when unknown or never filled."""
        parsed = Category.parse(category)
        if parsed is None:
            return []
        snapshot = self._snapshots.get(parsed)
        if snapshot is None:
            return []
        return list(snapshot.items)

    def snapshot(self, category: Category) -> CategorySnapshot:
        return self._snapshots.get(category) or CategorySnapshot(category=category)

    def last_attempt(self, category: Category) -> RefreshAttempt | None:
        return self._attempts.get(category)

    def status(self, now: datetime | None = None) -> list[CategoryStatus]:
        """Per-category freshness, in category order."""
        now = now or _utc_now()
        statuses = []
        for category in self._categories:
            snapshot = self.snapshot(category)
            statuses.append(
                CategoryStatus(
                    category=category,
                    item_count=len(snapshot.items),
                    refreshed_at=snapshot.refreshed_at,
                    stale=self._is_stale(snapshot, now),
                    last_attempt=self._attempts.get(category),
                )
            )
        return statuses

    def _is_stale(self, snapshot: CategorySnapshot, now: datetime) -> bool:
        if snapshot.refreshed_at is None:
            return True
        if self._stale_after is None:
            return False
        return now - snapshot.refreshed_at > self._stale_after

    async def refresh_one(self, category: Category) -> bool:
        """Refresh one category. Returns whether a new snapshot was installed."""
        started = time.monotonic()
        attempted_at = _utc_now()
        try:
            prompt = build_category_prompt(category)
            raw = await self._generator.generate(prompt)
            items = parse_item_list(raw, ContentItem)
        except (GenerationFailedError, ContentParseError) as e:
            self._record_failure(category, attempted_at, str(e))
            return False
        except Exception as e:
            logger.exception(f"Unexpected error refreshing [{category.value}]: {e}")
            self._record_failure(category, attempted_at, f"{type(e).__name__}: {e}")
            return False

        self._snapshots[category] = CategorySnapshot(
            category=category,
            items=tuple(items),
            refreshed_at=_utc_now(),
        )
        self._attempts[category] = RefreshAttempt(
            category=category, attempted_at=attempted_at, succeeded=True
        )

        latency_ms = int((time.monotonic() - started) * 1000)
        logger.info(f"[{category.value}] refreshed with {len(items)} items")
        BusinessEvents.today_refreshed(
            category=category.value, item_count=len(items), latency_ms=latency_ms
        )
        return True

    def _record_failure(
        self, category: Category, attempted_at: datetime, error: str
    ) -> None:
        self._attempts[category] = RefreshAttempt(
            category=category,
            attempted_at=attempted_at,
            succeeded=False,
            error=error,
        )
        logger.warning(f"[{category.value}] refresh failed, keeping previous snapshot: {error}")
        BusinessEvents.today_refresh_failed(category=category.value, error=error)

    async def refresh_all(self) -> dict[Category, bool]:
        """Refresh every category concurrently and wait for all of them."""
        logger.info("Today refresh cycle started")
        results = await asyncio.gather(
            *(self.refresh_one(category) for category in self._categories),
            return_exceptions=True,
        )
        outcome = {
            category: result is True
            for category, result in zip(self._categories, results, strict=True)
        }
        succeeded = sum(outcome.values())
        logger.info(f"Today refresh cycle finished: {succeeded}/{len(outcome)} updated")
        return outcome
