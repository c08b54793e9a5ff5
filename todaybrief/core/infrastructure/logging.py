"""Logging setup.

Operational logs go through loguru; uvicorn, SQLAlchemy and APScheduler log
through the standard library and are forwarded into loguru. Business events
(refresh cycles, news writes, Kakao deliveries) are emitted by structlog as
key/value records so they can be filtered by ``event_type``.
"""

import logging
import sys
from typing import Any

import structlog
from loguru import logger

from todaybrief.core.config import settings

FORWARDED_LOGGERS = ("uvicorn", "uvicorn.error", "sqlalchemy.engine", "apscheduler")

_LOGURU_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Hand standard-library records over to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """Configure loguru, stdlib forwarding and structlog. Safe to call twice."""
    level = settings.LOG_LEVEL.upper()
    is_local = settings.ENVIRONMENT == "local"

    logger.remove()
    if is_local:
        logger.add(sys.stderr, level=level, format=_LOGURU_FORMAT, colorize=True)
    else:
        logger.add(sys.stderr, level=level, serialize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in FORWARDED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if is_local
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logger.info(f"Logging configured (level={level}, local={is_local})")


def get_business_logger(name: str = "business") -> structlog.BoundLogger:
    """Structured logger for ad-hoc business events."""
    return structlog.get_logger(name)


class BusinessEvents:
    """Helpers that keep business event names and fields consistent."""

    _log = get_business_logger("business.events")

    @classmethod
    def today_refreshed(
        cls,
        category: str,
        item_count: int,
        latency_ms: int,
        **extra: Any,
    ) -> None:
        cls._log.info(
            "today_refreshed",
            event_type="today",
            category=category,
            item_count=item_count,
            latency_ms=latency_ms,
            **extra,
        )

    @classmethod
    def today_refresh_failed(
        cls,
        category: str,
        error: str,
        **extra: Any,
    ) -> None:
        cls._log.warning(
            "today_refresh_failed",
            event_type="today_error",
            category=category,
            error=error,
            **extra,
        )

    @classmethod
    def today_refresh_skipped(cls, reason: str, **extra: Any) -> None:
        cls._log.warning(
            "today_refresh_skipped",
            event_type="today",
            reason=reason,
            **extra,
        )

    @classmethod
    def comment_created(
        cls,
        comment_id: int,
        news_id: int,
        has_nickname: bool,
        **extra: Any,
    ) -> None:
        cls._log.info(
            "comment_created",
            event_type="comment",
            comment_id=comment_id,
            news_id=news_id,
            has_nickname=has_nickname,
            **extra,
        )

    @classmethod
    def news_batch_saved(
        cls,
        saved: int,
        dropped: int,
        first_id: int | None,
        **extra: Any,
    ) -> None:
        cls._log.info(
            "news_batch_saved",
            event_type="news",
            saved=saved,
            dropped=dropped,
            first_id=first_id,
            **extra,
        )

    @classmethod
    def news_cleared(cls, deleted: int, **extra: Any) -> None:
        cls._log.info(
            "news_cleared",
            event_type="news",
            deleted=deleted,
            **extra,
        )

    @classmethod
    def kakao_message_sent(
        cls,
        success: bool,
        used_default: bool,
        **extra: Any,
    ) -> None:
        level = "info" if success else "warning"
        getattr(cls._log, level)(
            "kakao_message_sent",
            event_type="kakao",
            success=success,
            used_default=used_default,
            **extra,
        )
