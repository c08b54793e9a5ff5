"""Application configuration."""

import secrets
import warnings
from typing import Annotated, Any, Literal, Self

from pydantic import AnyUrl, BeforeValidator, computed_field, model_validator
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "todaybrief"
    SERVER_PORT: int = 3001
    ROOTPATH: str = ""
    SECRET_KEY: str = secrets.token_urlsafe(32)
    FRONTEND_HOST: str = "http://localhost:5173"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Gemini (OpenAI-compatible endpoint). No default: startup fails without it.
    GEMINI_API_KEY: str
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT_SEC: float = 60.0

    # Kakao
    KAKAO_REST_API_KEY: str | None = None
    KAKAO_REDIRECT_URI: str = "http://localhost:3001/oauth/kakao/callback"
    KAKAO_AUTH_HOST: str = "https://kauth.kakao.com"
    KAKAO_API_HOST: str = "https://kapi.kakao.com"
    KAKAO_MESSAGE_LINK_URL: str = "https://example.com"
    KAKAO_DEFAULT_MESSAGE: str = "안녕하세요! (아직 Gemini 응답이 없습니다.)"
    KAKAO_TIMEOUT_SEC: float = 10.0

    # PostgreSQL
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "todaybrief"
    DB_CREATE_TABLES: bool = True

    @computed_field
    @property
    def database_url_object(self) -> MultiHostUrl:
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        return str(self.database_url_object)

    # Today cache
    TODAY_REFRESH_ENABLED: bool = True
    TODAY_REFRESH_INTERVAL_SEC: int = 60 * 60
    TODAY_STARTUP_REFRESH_TIMEOUT_SEC: float = 60.0
    TODAY_STALE_AFTER_SEC: int = 3 * 60 * 60

    # News
    NEWS_TODAY_LIMIT: int = 25
    NEWS_LIST_DEFAULT_LIMIT: int = 25
    NEWS_LIST_MAX_LIMIT: int = 50
    NEWS_TITLE_MAX_CHARS: int = 200
    NEWS_CONTENT_MAX_CHARS: int = 5000
    COMMENT_TEXT_MAX_CHARS: int = 500
    COMMENT_NICKNAME_MAX_CHARS: int = 30

    # Chat
    CHAT_INSTRUCTION_SUFFIX: str = (
        "\n\n위 질문에 한국어로 간결하게 답해줘. 마크다운 없이 평문으로만 답해."
    )

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("SECRET_KEY", self.SECRET_KEY)
        self._check_default_secret("GEMINI_API_KEY", self.GEMINI_API_KEY)
        return self

    @model_validator(mode="after")
    def _require_gemini_key(self) -> Self:
        if not self.GEMINI_API_KEY.strip():
            raise ValueError("GEMINI_API_KEY is required")
        return self


settings = Settings()  # type: ignore[call-arg]
