"""Process-wide configuration resolved once from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping

from dotenv import load_dotenv

from trivia_quiz.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_FRONTEND_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
)
from trivia_quiz.constants.quiz_constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TARGET_SCORE,
)
from trivia_quiz.constants.sheet_constants import (
    DEFAULT_QUESTION_RANGE,
    DEFAULT_USER_DATA_RANGE,
    PLACEHOLDER_SPREADSHEET_ID,
)

_DEV_SESSION_SECRET = "quiz-app-secret-key-change-in-production"
PRODUCTION = "production"
DEVELOPMENT = "development"


@dataclass(frozen=True, slots=True)
class Settings:
    """Every setting the service recognizes, with development defaults."""

    environment: str = DEVELOPMENT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    frontend_url: str = DEFAULT_FRONTEND_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    cors_origins: tuple[str, ...] = (DEFAULT_FRONTEND_URL,)
    session_secret: str = _DEV_SESSION_SECRET
    google_client_id: str | None = None
    google_client_secret: str | None = None
    github_client_id: str | None = None
    github_client_secret: str | None = None
    spreadsheet_id: str | None = None
    sheets_range: str = DEFAULT_QUESTION_RANGE
    user_data_range: str = DEFAULT_USER_DATA_RANGE
    service_account_json: str | None = None
    credentials_path: str | None = None
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    target_score: int = DEFAULT_TARGET_SCORE
    question_count: int = DEFAULT_QUESTION_COUNT
    oauth_providers: tuple[str, ...] = field(default=(), init=False)

    def __post_init__(self) -> None:
        providers = []
        if self.google_client_id and self.google_client_secret:
            providers.append("google")
        if self.github_client_id and self.github_client_secret:
            providers.append("github")
        object.__setattr__(self, "oauth_providers", tuple(providers))

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def sheets_configured(self) -> bool:
        return bool(self.spreadsheet_id)

    def callback_url(self, provider: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/api/auth/{provider}/callback"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ`` after loading ``.env``)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        def text(name: str) -> str | None:
            value = environ.get(name, "").strip()
            return value or None

        def integer(name: str, default: int) -> int:
            raw_value = text(name)
            if raw_value is None:
                return default
            try:
                return int(raw_value)
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer, got {raw_value!r}.") from exc

        environment = (text("QUIZ_ENV") or text("ENVIRONMENT") or DEVELOPMENT).lower()
        frontend_url = text("FRONTEND_URL") or DEFAULT_FRONTEND_URL
        cors_raw = text("CORS_ORIGINS")
        cors_origins = (
            tuple(origin.strip() for origin in cors_raw.split(",") if origin.strip())
            if cors_raw
            else (frontend_url,)
        )
        spreadsheet_id = text("GOOGLE_SPREADSHEET_ID")
        if spreadsheet_id == PLACEHOLDER_SPREADSHEET_ID:
            spreadsheet_id = None

        return cls(
            environment=environment,
            host=text("HOST") or DEFAULT_HOST,
            port=integer("PORT", DEFAULT_PORT),
            frontend_url=frontend_url,
            api_base_url=text("API_BASE_URL") or DEFAULT_API_BASE_URL,
            cors_origins=cors_origins,
            session_secret=text("SESSION_SECRET") or _DEV_SESSION_SECRET,
            google_client_id=text("GOOGLE_CLIENT_ID"),
            google_client_secret=text("GOOGLE_CLIENT_SECRET"),
            github_client_id=text("GITHUB_CLIENT_ID"),
            github_client_secret=text("GITHUB_CLIENT_SECRET"),
            spreadsheet_id=spreadsheet_id,
            sheets_range=text("GOOGLE_SHEETS_RANGE") or DEFAULT_QUESTION_RANGE,
            user_data_range=text("GOOGLE_USER_DATA_RANGE") or DEFAULT_USER_DATA_RANGE,
            service_account_json=text("GOOGLE_SERVICE_ACCOUNT_JSON"),
            credentials_path=text("GOOGLE_APPLICATION_CREDENTIALS"),
            cache_ttl_seconds=integer("QUESTION_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS),
            target_score=integer("QUIZ_TARGET_SCORE", DEFAULT_TARGET_SCORE),
            question_count=integer("QUIZ_QUESTION_COUNT", DEFAULT_QUESTION_COUNT),
        )
