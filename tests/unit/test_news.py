"""Tests for the news and comment store."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from todaybrief.core.domain.exceptions import ValidationError
from todaybrief.modules.news.application.commands import (
    CreateCommentCommand,
    SaveNewsBatchCommand,
)
from todaybrief.modules.news.application.handlers import (
    CreateCommentHandler,
    SaveNewsBatchHandler,
)
from todaybrief.modules.news.domain.entities import News, NewsComment
from todaybrief.modules.news.domain.exceptions import (
    EmptyNewsBatchError,
    NewsNotFoundError,
)
from todaybrief.modules.news.infrastructure.mappers import NewsCommentMapper, NewsMapper
from todaybrief.modules.news.infrastructure.repositories import (
    PostgreSQLNewsCommentRepository,
    PostgreSQLNewsRepository,
)

pytestmark = pytest.mark.anyio


# ============================================
# Domain Entity Tests
# ============================================


class TestNewsComment:
    def test_display_text_with_nickname(self) -> None:
        comment = NewsComment(news_id=1, nickname="bob", comment_text="hi")
        assert comment.display_text == "bob: hi"

    def test_display_text_without_nickname(self) -> None:
        comment = NewsComment(news_id=1, comment_text="hi")
        assert comment.display_text == "hi"


# ============================================
# Handler Tests
# ============================================


class TestSaveNewsBatchHandler:
    def test_clean_trims_caps_and_drops(self) -> None:
        handler = SaveNewsBatchHandler(MagicMock())

        cleaned = handler.clean(
            [
                {"title": "  제목  ", "content": " 본문 "},
                {"title": "", "content": "   "},
                "not an object",
                {"title": "x" * 500, "content": "y" * 6000},
                {"title": 3, "content": "숫자 제목"},
            ]
        )

        assert [(n.title, n.content) for n in cleaned[:1]] == [("제목", "본문")]
        assert len(cleaned) == 3
        assert len(cleaned[1].title) == 200
        assert len(cleaned[1].content) == 5000
        assert cleaned[2].title == ""

    def test_non_array_rejected(self) -> None:
        handler = SaveNewsBatchHandler(MagicMock())
        with pytest.raises(ValidationError):
            handler.clean({"title": "a", "content": "b"})

    async def test_all_empty_batch_rejected_without_insert(self) -> None:
        repository = MagicMock()
        repository.bulk_create = AsyncMock()
        handler = SaveNewsBatchHandler(repository)

        with pytest.raises(EmptyNewsBatchError):
            await handler.handle(
                SaveNewsBatchCommand(entries=[{"title": " ", "content": ""}])
            )
        repository.bulk_create.assert_not_awaited()


class TestCreateCommentHandler:
    def _handler(self, exists: bool) -> tuple[CreateCommentHandler, MagicMock]:
        news_repository = MagicMock()
        news_repository.exists = AsyncMock(return_value=exists)
        comment_repository = MagicMock()

        async def create(comment: NewsComment) -> NewsComment:
            return comment.model_copy(update={"id": 7})

        comment_repository.create = AsyncMock(side_effect=create)
        return CreateCommentHandler(news_repository, comment_repository), comment_repository

    @pytest.mark.parametrize(
        "command",
        [
            CreateCommentCommand(news_id=None, text="hi"),
            CreateCommentCommand(news_id="  ", text="hi"),
            CreateCommentCommand(news_id="1", text=None),
            CreateCommentCommand(news_id="1", text="   "),
        ],
    )
    async def test_missing_fields_rejected(self, command: CreateCommentCommand) -> None:
        handler, comments = self._handler(exists=True)
        with pytest.raises(ValidationError):
            await handler.handle(command)
        comments.create.assert_not_awaited()

    @pytest.mark.parametrize("news_id", ["999", "abc", "-1"])
    async def test_unknown_article_is_not_found(self, news_id: str) -> None:
        handler, comments = self._handler(exists=False)
        with pytest.raises(NewsNotFoundError):
            await handler.handle(CreateCommentCommand(news_id=news_id, text="hi"))
        comments.create.assert_not_awaited()

    async def test_trims_and_caps(self) -> None:
        handler, _ = self._handler(exists=True)

        comment = await handler.handle(
            CreateCommentCommand(news_id=" 1 ", text="  " + "a" * 600, nickname=" " + "n" * 40)
        )

        assert comment.id == 7
        assert comment.news_id == 1
        assert len(comment.comment_text) == 500
        assert comment.nickname == "n" * 30

    async def test_blank_nickname_stored_as_none(self) -> None:
        handler, _ = self._handler(exists=True)
        comment = await handler.handle(
            CreateCommentCommand(news_id="1", text="hi", nickname="  ")
        )
        assert comment.nickname is None
        assert comment.display_text == "hi"


# ============================================
# Repository Tests
# ============================================


class TestNewsRepositories:
    async def test_bulk_create_assigns_ids_in_order(self, db_session) -> None:
        repository = PostgreSQLNewsRepository(db_session, NewsMapper())

        saved = await repository.bulk_create(
            [News(title="a", content="1"), News(title="b", content="2")]
        )

        assert [n.title for n in saved] == ["a", "b"]
        assert saved[0].id is not None and saved[1].id == saved[0].id + 1
        assert await repository.exists(saved[0].id)
        assert not await repository.exists(saved[1].id + 100)

    async def test_list_recent_newest_first(self, db_session) -> None:
        repository = PostgreSQLNewsRepository(db_session, NewsMapper())
        await repository.bulk_create([News(title=str(i)) for i in range(5)])

        recent = await repository.list_recent(3)

        assert [n.title for n in recent] == ["4", "3", "2"]

    async def test_comments_grouped_oldest_first(self, db_session) -> None:
        news_repository = PostgreSQLNewsRepository(db_session, NewsMapper())
        comment_repository = PostgreSQLNewsCommentRepository(db_session, NewsCommentMapper())
        first, second = await news_repository.bulk_create(
            [News(title="a"), News(title="b")]
        )
        await comment_repository.create(NewsComment(news_id=first.id, comment_text="1"))
        await comment_repository.create(NewsComment(news_id=first.id, comment_text="2"))

        grouped = await comment_repository.list_by_news_ids([first.id, second.id])

        assert [c.comment_text for c in grouped[first.id]] == ["1", "2"]
        assert second.id not in grouped
        assert await comment_repository.list_by_news_ids([]) == {}


# ============================================
# API Tests
# ============================================


async def _seed(async_client, entries: list[dict]) -> dict:
    response = await async_client.post("/api/news", json=entries)
    assert response.status_code == 200
    return response.json()


class TestNewsApi:
    async def test_bulk_save_and_list(self, async_client) -> None:
        body = await _seed(
            async_client,
            [
                {"title": " 첫 기사 ", "content": "내용"},
                {"title": "", "content": ""},
                {"title": "둘째", "content": ""},
            ],
        )

        assert body["ok"] is True
        assert body["saved"] == 2
        assert isinstance(body["firstId"], int)

        response = await async_client.get("/api/news")
        titles = [n["title"] for n in response.json()]
        assert titles == ["둘째", "첫 기사"]
        assert "createdAt" in response.json()[0]

    async def test_bulk_save_rejects_non_array(self, async_client) -> None:
        response = await async_client.post("/api/news", json={"title": "a"})
        assert response.status_code == 400

    async def test_bulk_save_all_empty_is_400_and_inserts_nothing(self, async_client) -> None:
        response = await async_client.post(
            "/api/news", json=[{"title": "", "content": ""}, {"title": "  ", "content": " "}]
        )

        assert response.status_code == 400
        assert (await async_client.get("/api/news")).json() == []

    async def test_bulk_save_is_atomic(self, async_client, monkeypatch) -> None:
        original = NewsMapper.to_model
        calls = {"count": 0}

        def failing_to_model(self, entity):
            calls["count"] += 1
            if calls["count"] == 3:
                raise OperationalError("INSERT INTO news", {}, Exception("disk full"))
            return original(self, entity)

        monkeypatch.setattr(NewsMapper, "to_model", failing_to_model)

        response = await async_client.post(
            "/api/news",
            json=[
                {"title": "a", "content": "1"},
                {"title": "b", "content": "2"},
                {"title": "c", "content": "3"},
            ],
        )

        assert response.status_code == 500
        assert response.json()["code"] == "PERSISTENCE_ERROR"
        monkeypatch.undo()
        assert (await async_client.get("/api/news")).json() == []

    async def test_list_limit_is_capped(self, async_client) -> None:
        await _seed(async_client, [{"title": str(i), "content": "x"} for i in range(60)])

        assert len((await async_client.get("/api/news")).json()) == 25
        assert len((await async_client.get("/api/news?limit=5")).json()) == 5
        assert len((await async_client.get("/api/news?limit=500")).json()) == 50

    async def test_comment_end_to_end(self, async_client) -> None:
        first_id = (await _seed(async_client, [{"title": "기사", "content": "본문"}]))["firstId"]

        response = await async_client.post(
            "/today/news/comments",
            json={"newsId": str(first_id), "text": "hi", "nickname": "bob"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        comment = body["comment"]
        assert comment["newsId"] == str(first_id)
        assert comment["text"] == "bob: hi"
        assert isinstance(comment["id"], int)
        assert comment["createdAt"]

        today = (await async_client.get("/today/news")).json()
        assert len(today) == 1
        article = today[0]
        assert article["title"] == "기사"
        assert [c["text"] for c in article["comments"]] == ["bob: hi"]
        assert article["command"]["method"] == "POST"
        assert article["command"]["path"] == "/today/news/comments"
        assert article["command"]["body"]["newsId"] == str(first_id)

    async def test_comment_numeric_news_id_accepted(self, async_client) -> None:
        first_id = (await _seed(async_client, [{"title": "기사", "content": ""}]))["firstId"]

        response = await async_client.post(
            "/today/news/comments", json={"newsId": first_id, "text": "hi"}
        )

        assert response.status_code == 200
        assert response.json()["comment"]["text"] == "hi"

    async def test_comment_on_missing_article_is_404(self, async_client) -> None:
        response = await async_client.post(
            "/today/news/comments", json={"newsId": "999", "text": "hi"}
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_comment_missing_text_is_400(self, async_client) -> None:
        response = await async_client.post("/today/news/comments", json={"newsId": "1"})
        assert response.status_code == 400

    async def test_clear_removes_articles_and_comments(self, async_client) -> None:
        first_id = (await _seed(async_client, [{"title": "a"}, {"title": "b"}]))["firstId"]
        await async_client.post(
            "/today/news/comments", json={"newsId": str(first_id), "text": "hi"}
        )

        response = await async_client.delete("/api/news")

        assert response.json() == {"ok": True, "deleted": 2}
        assert (await async_client.get("/today/news")).json() == []
