"""News and comment routes (database-backed)."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from todaybrief.modules.news.application.commands import (
    ClearNewsCommand,
    CreateCommentCommand,
    SaveNewsBatchCommand,
)
from todaybrief.modules.news.application.dependencies import (
    get_clear_news_handler,
    get_create_comment_handler,
    get_news_query_service,
    get_save_news_batch_handler,
)
from todaybrief.modules.news.application.handlers import (
    ClearNewsHandler,
    CreateCommentHandler,
    SaveNewsBatchHandler,
)
from todaybrief.modules.news.application.models import CommentData
from todaybrief.modules.news.application.services import (
    NewsQueryService,
    to_comment_data,
)
from todaybrief.modules.news.interfaces.schemas import (
    ClearNewsResponse,
    CommentCommandResponse,
    CommentResponse,
    CreateCommentRequest,
    CreateCommentResponse,
    NewsResponse,
    SaveNewsResponse,
    TodayNewsResponse,
)

router = APIRouter(tags=["news"])


def _to_comment_response(
    comment: CommentData, news_id: str | None = None
) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        news_id=news_id if news_id is not None else str(comment.news_id),
        text=comment.text,
        created_at=comment.created_at,
    )


@router.get(
    "/today/news",
    response_model=list[TodayNewsResponse],
    summary="Latest articles with comments",
)
async def list_today_news(
    service: NewsQueryService = Depends(get_news_query_service),
) -> list[TodayNewsResponse]:
    news_list = await service.list_today_news()
    return [
        TodayNewsResponse(
            id=news.id,
            title=news.title,
            content=news.content,
            comments=[_to_comment_response(c) for c in news.comments],
            command=CommentCommandResponse(**news.command.model_dump()),
        )
        for news in news_list
    ]


@router.post(
    "/today/news/comments",
    response_model=CreateCommentResponse,
    summary="Comment on an article",
)
async def create_comment(
    request: CreateCommentRequest,
    handler: CreateCommentHandler = Depends(get_create_comment_handler),
) -> CreateCommentResponse:
    """The submitted ``newsId`` is echoed back as given (string form)."""
    news_id = None if request.news_id is None else str(request.news_id)
    command = CreateCommentCommand(
        news_id=news_id,
        text=request.text,
        nickname=request.nickname,
    )
    comment = await handler.handle(command)
    return CreateCommentResponse(
        comment=_to_comment_response(to_comment_data(comment), news_id=news_id),
    )


@router.post(
    "/api/news",
    response_model=SaveNewsResponse,
    summary="Bulk-save articles",
)
async def save_news(
    payload: Any = Body(...),
    handler: SaveNewsBatchHandler = Depends(get_save_news_batch_handler),
) -> SaveNewsResponse:
    saved = await handler.handle(SaveNewsBatchCommand(entries=payload))
    return SaveNewsResponse(saved=len(saved), first_id=saved[0].id)


@router.get(
    "/api/news",
    response_model=list[NewsResponse],
    summary="List recent articles",
)
async def list_news(
    limit: int | None = Query(default=None, description="Max articles (capped)"),
    service: NewsQueryService = Depends(get_news_query_service),
) -> list[NewsResponse]:
    news_list = await service.list_recent(limit)
    return [
        NewsResponse(
            id=news.id,
            title=news.title,
            content=news.content,
            created_at=news.created_at,
        )
        for news in news_list
    ]


@router.delete(
    "/api/news",
    response_model=ClearNewsResponse,
    summary="Delete every article and comment",
)
async def clear_news(
    handler: ClearNewsHandler = Depends(get_clear_news_handler),
) -> ClearNewsResponse:
    deleted = await handler.handle(ClearNewsCommand())
    return ClearNewsResponse(deleted=deleted)
