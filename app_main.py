"""Application entry point for the trivia quiz service."""

from __future__ import annotations

from trivia_quiz.core.quiz_manager import QuizManager
from trivia_quiz.core.settings import Settings
from trivia_quiz.server.api_server import run_api_server
from trivia_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, resolve settings once, and serve the API."""
    logger = configure_logging()
    settings = Settings.from_env()
    logger.info("Starting quiz backend (%s)…", settings.environment)

    quiz_manager = QuizManager.from_settings(settings)
    logger.info("Health check: http://localhost:%d/api/health", settings.port)
    logger.info("Questions API: http://localhost:%d/api/questions", settings.port)
    if settings.oauth_providers:
        logger.info("OAuth providers: %s", ", ".join(settings.oauth_providers))
    else:
        logger.warning("No OAuth providers configured; quiz endpoints will reject every request")
    run_api_server(quiz_manager, settings)


if __name__ == "__main__":
    main()
