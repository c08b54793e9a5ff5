"""Holder for the most recent chat reply.

The Kakao callback forwards the latest reply as a message, so the reply is
kept on an application-owned object rather than a module global.
"""

from datetime import UTC, datetime

from todaybrief.modules.assistant.domain.entities import ChatReply


class ChatReplyStore:
    def __init__(self) -> None:
        self._latest: ChatReply | None = None

    @property
    def latest(self) -> ChatReply | None:
        return self._latest

    def remember(self, text: str) -> ChatReply:
        reply = ChatReply(text=text, created_at=datetime.now(UTC))
        self._latest = reply
        return reply

    def latest_text(self) -> str:
        """Latest reply text, stripped; empty when nothing was generated yet."""
        return self._latest.text.strip() if self._latest else ""
