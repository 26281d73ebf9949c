"""
Tests for environment-driven settings.
"""

import pytest

from trivia_quiz.constants.sheet_constants import PLACEHOLDER_SPREADSHEET_ID
from trivia_quiz.core.settings import Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.port == 5000
    assert settings.target_score == 100
    assert settings.question_count == 10
    assert settings.cache_ttl_seconds == 300
    assert settings.cors_origins == ("http://localhost:5173",)
    assert settings.oauth_providers == ()
    assert not settings.sheets_configured
    assert not settings.is_production


def test_values_are_read_from_environment():
    settings = Settings.from_env(
        {
            "QUIZ_ENV": "Production",
            "PORT": "8080",
            "FRONTEND_URL": "https://quiz.example.com",
            "CORS_ORIGINS": "https://a.example.com, https://b.example.com,",
            "GOOGLE_SPREADSHEET_ID": "sheet-123",
            "QUIZ_TARGET_SCORE": "60",
            "QUIZ_QUESTION_COUNT": "6",
        }
    )

    assert settings.is_production
    assert settings.port == 8080
    assert settings.cors_origins == ("https://a.example.com", "https://b.example.com")
    assert settings.spreadsheet_id == "sheet-123"
    assert settings.sheets_configured
    assert settings.target_score == 60
    assert settings.question_count == 6


def test_placeholder_spreadsheet_id_is_ignored():
    settings = Settings.from_env({"GOOGLE_SPREADSHEET_ID": PLACEHOLDER_SPREADSHEET_ID})

    assert settings.spreadsheet_id is None


def test_invalid_integer_is_reported():
    with pytest.raises(ValueError, match="PORT"):
        Settings.from_env({"PORT": "eighty"})


def test_providers_need_id_and_secret():
    settings = Settings.from_env(
        {
            "GOOGLE_CLIENT_ID": "google-id",
            "GOOGLE_CLIENT_SECRET": "google-secret",
            "GITHUB_CLIENT_ID": "github-id",
        }
    )

    assert settings.oauth_providers == ("google",)


def test_callback_url():
    settings = Settings(api_base_url="https://api.example.com/")

    assert settings.callback_url("github") == "https://api.example.com/api/auth/github/callback"
