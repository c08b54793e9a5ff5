"""Kakao login and message delivery."""

from loguru import logger

from todaybrief.core.domain.exceptions import UpstreamAuthError
from todaybrief.core.infrastructure.logging import BusinessEvents
from todaybrief.modules.assistant.application.reply_store import ChatReplyStore
from todaybrief.modules.kakao.domain.entities import KakaoLoginResult
from todaybrief.modules.kakao.domain.ports import KakaoGateway


class KakaoMessageService:
    """Completes the OAuth callback by forwarding the latest chat reply."""

    def __init__(
        self,
        gateway: KakaoGateway,
        reply_store: ChatReplyStore,
        default_message: str,
    ):
        self.gateway = gateway
        self.reply_store = reply_store
        self.default_message = default_message
        self.logger = logger.bind(service="KakaoMessageService")

    def authorize_url(self) -> str:
        return self.gateway.build_authorize_url()

    async def exchange_code(self, code: str | None) -> str:
        """Trade the authorization ``code`` for an access token."""
        if not code:
            raise UpstreamAuthError("인가 코드가 없습니다.")
        return await self.gateway.exchange_code(code)

    async def send_latest_reply(self, access_token: str) -> KakaoLoginResult:
        """Send the last chat reply, or the default greeting when there is none."""
        text = self.reply_store.latest_text()
        used_default = not text
        if used_default:
            text = self.default_message

        try:
            await self.gateway.send_memo(access_token, text)
        except UpstreamAuthError:
            BusinessEvents.kakao_message_sent(success=False, used_default=used_default)
            raise

        BusinessEvents.kakao_message_sent(success=True, used_default=used_default)
        return KakaoLoginResult(
            access_token=access_token,
            message_text=text,
            used_default=used_default,
        )
