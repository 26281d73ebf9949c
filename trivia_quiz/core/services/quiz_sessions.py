"""Service for managing each user's active quiz and its answers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
import random
from threading import Lock
from typing import Callable, Sequence
from uuid import uuid4

from trivia_quiz.core.models import QuizQuestion, ScoreSummary, SelectionResult, UserAnswer
from trivia_quiz.core.question_selector import select_questions
from trivia_quiz.core.scoring import score_quiz


class QuizSessionError(RuntimeError):
    """Raised when an operation needs a quiz the user has not started."""


@dataclass(slots=True)
class QuizSession:
    """Selection served to one user plus the answers collected so far."""

    quiz_id: str
    user_id: str
    selection: SelectionResult
    started_at: datetime
    answers: dict[int, UserAnswer] = field(default_factory=dict)

    def answered_ids(self) -> list[int]:
        return sorted(self.answers)


class QuizSessionStore:
    """Keeps at most one quiz per user; starting a new quiz replaces the old one."""

    def __init__(self, rng_factory: Callable[[], random.Random] = random.Random) -> None:
        self._lock = Lock()
        self._rng_factory = rng_factory
        self._sessions: dict[str, QuizSession] = {}

    def start_quiz(
        self,
        user_id: str,
        pool: Sequence[QuizQuestion],
        target_score: int,
        count: int,
    ) -> QuizSession:
        selection = select_questions(pool, target_score, count, rng=self._rng_factory())
        session = QuizSession(
            quiz_id=uuid4().hex,
            user_id=user_id,
            selection=selection,
            started_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._sessions[user_id] = session
            return _snapshot(session)

    def get_session(self, user_id: str) -> QuizSession | None:
        """Return a copy of the user's quiz; later answers do not change it."""
        with self._lock:
            session = self._sessions.get(user_id)
            return _snapshot(session) if session is not None else None

    def record_answer(self, user_id: str, question_id: int, option_index: int) -> UserAnswer:
        """Record an answer; a repeated answer for the same question replaces the earlier one."""
        with self._lock:
            session = self._require_session(user_id)
            question = next(
                (q for q in session.selection.questions if q.id == question_id), None
            )
            if question is None:
                raise ValueError(f"Question {question_id} is not part of the current quiz.")
            if not 0 <= option_index < len(question.options):
                raise ValueError(
                    f"Option index must be between 0 and {len(question.options) - 1}."
                )
            answer = UserAnswer(question_id=question_id, selected_option_index=option_index)
            session.answers[question_id] = answer
            return answer

    def submit(self, user_id: str) -> ScoreSummary:
        """Score the user's quiz and end it."""
        with self._lock:
            session = self._require_session(user_id)
            del self._sessions[user_id]
        return score_quiz(session.selection, session.answers.values())

    def abandon(self, user_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(user_id, None) is not None

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _require_session(self, user_id: str) -> QuizSession:
        session = self._sessions.get(user_id)
        if session is None:
            raise QuizSessionError("No quiz in progress. Start a quiz first.")
        return session


def _snapshot(session: QuizSession) -> QuizSession:
    return replace(session, answers=dict(session.answers))
