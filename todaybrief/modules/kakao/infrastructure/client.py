"""Kakao REST client (httpx).

Every failure, whether transport, HTTP status or malformed payload, is raised
as ``UpstreamAuthError`` so the callback page can render it.
"""

import json
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger

from todaybrief.core.config import settings
from todaybrief.core.domain.exceptions import UpstreamAuthError


class KakaoClient:
    """OAuth code exchange and "send to me" messaging."""

    AUTHORIZE_PATH = "/oauth/authorize"
    TOKEN_PATH = "/oauth/token"
    MEMO_PATH = "/v2/api/talk/memo/default/send"
    SCOPE = "talk_message"

    def __init__(
        self,
        rest_api_key: str | None = None,
        redirect_uri: str | None = None,
        auth_host: str | None = None,
        api_host: str | None = None,
        link_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.rest_api_key = rest_api_key or settings.KAKAO_REST_API_KEY
        self.redirect_uri = redirect_uri or settings.KAKAO_REDIRECT_URI
        self.auth_host = (auth_host or settings.KAKAO_AUTH_HOST).rstrip("/")
        self.api_host = (api_host or settings.KAKAO_API_HOST).rstrip("/")
        self.link_url = link_url or settings.KAKAO_MESSAGE_LINK_URL
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=settings.KAKAO_TIMEOUT_SEC)
        return self._client

    def _require_key(self) -> str:
        if not self.rest_api_key:
            raise UpstreamAuthError("KAKAO_REST_API_KEY가 설정되지 않았습니다.")
        return self.rest_api_key

    def build_authorize_url(self) -> str:
        """Consent is forced so a fresh token is issued on every login."""
        query = urlencode(
            {
                "client_id": self._require_key(),
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
                "scope": self.SCOPE,
                "prompt": "consent",
            }
        )
        return f"{self.auth_host}{self.AUTHORIZE_PATH}?{query}"

    async def exchange_code(self, code: str) -> str:
        payload = await self._post_form(
            f"{self.auth_host}{self.TOKEN_PATH}",
            data={
                "grant_type": "authorization_code",
                "client_id": self._require_key(),
                "redirect_uri": self.redirect_uri,
                "code": code,
            },
        )
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise UpstreamAuthError("카카오 토큰 응답에 access_token이 없습니다.")
        return token

    async def send_memo(self, access_token: str, text: str) -> None:
        template = {
            "object_type": "text",
            "text": text,
            "link": {"web_url": self.link_url, "mobile_web_url": self.link_url},
        }
        await self._post_form(
            f"{self.api_host}{self.MEMO_PATH}",
            data={"template_object": json.dumps(template, ensure_ascii=False)},
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def _post_form(
        self,
        url: str,
        data: dict[str, str],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self.client.post(url, data=data, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Kakao HTTP error for {url}: {e.response.status_code} {e.response.text}"
            )
            raise UpstreamAuthError(
                f"카카오 API 오류 (HTTP {e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Kakao request failed for {url}: {e}")
            raise UpstreamAuthError(f"카카오 API 요청 실패: {e}") from e
        except ValueError as e:
            raise UpstreamAuthError("카카오 API 응답을 해석할 수 없습니다.") from e

        if not isinstance(payload, dict):
            raise UpstreamAuthError("카카오 API 응답 형식이 올바르지 않습니다.")
        return payload

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
