"""Port for the Kakao OAuth and messaging API."""

from typing import Protocol


class KakaoGateway(Protocol):
    def build_authorize_url(self) -> str: ...

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token."""
        ...

    async def send_memo(self, access_token: str, text: str) -> None:
        """Send a text message to the user's own chat."""
        ...
