"""Service that supplies the question pool from the sheet, the cache or the fallback bank."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from trivia_quiz.constants.sheet_constants import (
    SOURCE_CACHED_FALLBACK,
    SOURCE_FALLBACK,
    SOURCE_FALLBACK_ERROR,
    SOURCE_SHEETS,
)
from trivia_quiz.core.fallback_questions import FALLBACK_QUESTIONS
from trivia_quiz.core.models import QuestionBatch, QuizQuestion
from trivia_quiz.core.question_normalizer import RawRow, normalize_rows
from trivia_quiz.core.services.question_cache import QuestionCache

logger = logging.getLogger(__name__)

RowFetcher = Callable[[], Sequence[RawRow]]


class QuestionSource:
    """Resolves the current question pool; always returns a usable batch."""

    def __init__(
        self,
        fetch_rows: RowFetcher | None,
        cache: QuestionCache,
        fallback: Sequence[QuizQuestion] = FALLBACK_QUESTIONS,
    ) -> None:
        self._fetch_rows = fetch_rows
        self._cache = cache
        self._fallback = tuple(fallback)

    @property
    def is_remote_configured(self) -> bool:
        return self._fetch_rows is not None

    def get_questions(self) -> QuestionBatch:
        cached = self._cache.get()
        if cached is not None:
            logger.debug("Using cached questions")
            return cached

        if self._fetch_rows is None:
            logger.debug("Google Sheets not configured, using fallback questions")
            return self._fallback_batch(SOURCE_FALLBACK)

        try:
            logger.info("Fetching fresh questions from Google Sheets")
            rows = self._fetch_rows()
        except Exception as exc:  # transport and API errors alike
            logger.error("Error fetching questions from Google Sheets: %s", exc)
            stale = self._cache.get_stale()
            if stale is not None:
                logger.warning("Using expired cache due to error")
                return stale.with_source(SOURCE_CACHED_FALLBACK)
            return self._fallback_batch(SOURCE_FALLBACK_ERROR)

        if not rows:
            logger.warning("No data found in Google Sheets, using fallback questions")
            return self._fallback_batch(SOURCE_FALLBACK)

        questions = normalize_rows(rows)
        if not questions:
            logger.warning(
                "No valid questions found in Google Sheets, using fallback questions. "
                "Expected columns: Question, Option1-4, CorrectAnswer, Weightage"
            )
            return self._fallback_batch(SOURCE_FALLBACK)

        batch = QuestionBatch(questions=tuple(questions), source=SOURCE_SHEETS)
        self._cache.put(batch)
        logger.info("Fetched %d questions from Google Sheets", len(questions))
        return batch

    def get_question(self, question_id: int) -> tuple[QuizQuestion | None, str]:
        batch = self.get_questions()
        question = next((q for q in batch.questions if q.id == question_id), None)
        return question, batch.source

    def refresh(self) -> QuestionBatch:
        self._cache.invalidate()
        return self.get_questions()

    def cache_status(self) -> dict[str, object]:
        return {
            "hasCachedQuestions": self._cache.has_entry(),
            "cacheAge": self._cache.age_seconds(),
            "ttlSeconds": self._cache.ttl_seconds,
        }

    def _fallback_batch(self, source: str) -> QuestionBatch:
        return QuestionBatch(questions=self._fallback, source=source)
