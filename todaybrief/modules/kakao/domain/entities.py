"""Kakao domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KakaoLoginResult:
    """Outcome of a completed OAuth callback."""

    access_token: str
    message_text: str
    used_default: bool
