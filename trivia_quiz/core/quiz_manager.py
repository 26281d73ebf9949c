"""Business logic shared by the API: question pool, quiz sessions and login audit."""

from __future__ import annotations

from functools import partial
import logging
import random
from typing import Callable

from trivia_quiz.constants.quiz_constants import DEFAULT_QUESTION_COUNT, DEFAULT_TARGET_SCORE
from trivia_quiz.core.models import (
    AuthenticatedUser,
    QuestionBatch,
    QuizQuestion,
    ScoreSummary,
    UserAnswer,
)
from trivia_quiz.core.question_normalizer import describe_pool
from trivia_quiz.core.services.question_cache import QuestionCache
from trivia_quiz.core.services.question_source import QuestionSource
from trivia_quiz.core.services.quiz_sessions import QuizSession, QuizSessionStore
from trivia_quiz.core.services.sheets_client import SheetsClient, SheetsConfigurationError
from trivia_quiz.core.services.user_audit import UserAuditLog
from trivia_quiz.core.settings import Settings

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade for quiz services: QuestionSource, QuizSessionStore and UserAuditLog."""

    def __init__(
        self,
        source: QuestionSource,
        sessions: QuizSessionStore | None = None,
        audit_log: UserAuditLog | None = None,
        target_score: int = DEFAULT_TARGET_SCORE,
        question_count: int = DEFAULT_QUESTION_COUNT,
    ) -> None:
        self._source = source
        self._sessions = sessions or QuizSessionStore()
        self._audit_log = audit_log or UserAuditLog()
        self._target_score = target_score
        self._question_count = question_count

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        rng_factory: Callable[[], random.Random] = random.Random,
    ) -> "QuizManager":
        fetch_rows = None
        append_row = None
        if settings.sheets_configured:
            try:
                client = SheetsClient.from_settings(settings)
            except SheetsConfigurationError as exc:
                logger.error("Error initializing Google Sheets API: %s", exc)
                logger.info("Will use fallback questions instead")
            else:
                fetch_rows = client.fetch_rows
                append_row = partial(client.append_row, settings.user_data_range)
                logger.info("Google Sheets configured for spreadsheet %s", client.spreadsheet_id)
        else:
            logger.info("Google Sheets not configured - using fallback questions")

        source = QuestionSource(fetch_rows, QuestionCache(settings.cache_ttl_seconds))
        return cls(
            source=source,
            sessions=QuizSessionStore(rng_factory=rng_factory),
            audit_log=UserAuditLog(append_row),
            target_score=settings.target_score,
            question_count=settings.question_count,
        )

    # --- Question Source Delegation ---

    @property
    def sheets_configured(self) -> bool:
        return self._source.is_remote_configured

    def get_questions(self) -> QuestionBatch:
        return self._source.get_questions()

    def get_question(self, question_id: int) -> tuple[QuizQuestion | None, str]:
        return self._source.get_question(question_id)

    def get_question_stats(self) -> dict[str, object]:
        batch = self._source.get_questions()
        stats = describe_pool(batch.questions)
        stats["source"] = batch.source
        return stats

    def refresh_questions(self) -> QuestionBatch:
        return self._source.refresh()

    def cache_status(self) -> dict[str, object]:
        return self._source.cache_status()

    # --- Quiz Session Delegation ---

    @property
    def default_target_score(self) -> int:
        return self._target_score

    @property
    def default_question_count(self) -> int:
        return self._question_count

    def start_quiz(
        self,
        user_id: str,
        target_score: int | None = None,
        count: int | None = None,
    ) -> tuple[QuizSession, str]:
        batch = self._source.get_questions()
        session = self._sessions.start_quiz(
            user_id,
            batch.questions,
            self._target_score if target_score is None else target_score,
            self._question_count if count is None else count,
        )
        selection = session.selection
        logger.info(
            "Started quiz %s for %s: %d/%d questions, %d/%d points (%s)",
            session.quiz_id,
            user_id,
            selection.delivered_count,
            selection.requested_count,
            selection.total_score,
            selection.target_score,
            batch.source,
        )
        return session, batch.source

    def get_quiz(self, user_id: str) -> QuizSession | None:
        return self._sessions.get_session(user_id)

    def submit_answer(self, user_id: str, question_id: int, option_index: int) -> UserAnswer:
        return self._sessions.record_answer(user_id, question_id, option_index)

    def submit_quiz(self, user_id: str) -> ScoreSummary:
        summary = self._sessions.submit(user_id)
        logger.info(
            "Quiz submitted by %s: %d/%d points", user_id, summary.total_score, summary.max_score
        )
        return summary

    def abandon_quiz(self, user_id: str) -> bool:
        return self._sessions.abandon(user_id)

    # --- Login Audit ---

    def record_login(self, user: AuthenticatedUser) -> bool:
        return self._audit_log.record_login(user)
