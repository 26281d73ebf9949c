"""Domain models for the trivia quiz service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator

from trivia_quiz.constants.quiz_constants import TIER_BY_SCORE, TIER_OTHER


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """Multiple-choice question weighted by its difficulty score."""

    id: int
    question_text: str
    options: tuple[str, ...]
    correct_option_index: int
    score: int

    @property
    def tier(self) -> str:
        return TIER_BY_SCORE.get(self.score, TIER_OTHER)

    def is_valid(self) -> bool:
        return (
            self.id > 0
            and bool(self.question_text)
            and len(self.options) >= 2
            and 0 <= self.correct_option_index < len(self.options)
            and self.score > 0
        )

    def to_dict(self, include_answer: bool = True) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "question": self.question_text,
            "options": list(self.options),
            "weightage": self.score,
        }
        if include_answer:
            payload["correctAnswer"] = self.correct_option_index
        return payload


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Questions picked for one quiz, in presentation order."""

    questions: tuple[QuizQuestion, ...]
    target_score: int
    requested_count: int

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[QuizQuestion]:
        return iter(self.questions)

    @property
    def total_score(self) -> int:
        return sum(question.score for question in self.questions)

    @property
    def delivered_count(self) -> int:
        return len(self.questions)

    @property
    def is_underfilled(self) -> bool:
        return self.delivered_count < max(self.requested_count, 0)

    @property
    def is_exact_match(self) -> bool:
        return not self.is_underfilled and self.total_score == self.target_score

    @property
    def question_ids(self) -> tuple[int, ...]:
        return tuple(question.id for question in self.questions)


@dataclass(frozen=True, slots=True)
class UserAnswer:
    """Option chosen by the user for one question."""

    question_id: int
    selected_option_index: int


@dataclass(frozen=True, slots=True)
class TierBreakdown:
    """Per-difficulty tally of a scored quiz."""

    correct: int = 0
    total: int = 0
    points: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"correct": self.correct, "total": self.total, "points": self.points}


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    """Result of scoring a quiz selection against the submitted answers."""

    total_score: int
    max_score: int
    answered_count: int
    total_count: int
    percentage: float
    tier_breakdown: tuple[tuple[str, TierBreakdown], ...] = ()

    def tier(self, name: str) -> TierBreakdown:
        for tier_name, breakdown in self.tier_breakdown:
            if tier_name == name:
                return breakdown
        return TierBreakdown()

    def to_dict(self) -> dict[str, object]:
        return {
            "totalScore": self.total_score,
            "maxScore": self.max_score,
            "percentage": self.percentage,
            "answeredQuestions": self.answered_count,
            "totalQuestions": self.total_count,
            "difficultyBreakdown": {
                name: breakdown.to_dict() for name, breakdown in self.tier_breakdown
            },
        }


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """Identity returned by an OAuth provider."""

    id: str
    provider: str
    name: str
    email: str | None = None
    avatar: str | None = None
    username: str | None = None

    @property
    def session_key(self) -> str:
        """Key for per-user state; provider ids are only unique within their provider."""
        return f"{self.provider}:{self.id}"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "provider": self.provider,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "username": self.username,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "AuthenticatedUser":
        def optional(key: str) -> str | None:
            value = payload.get(key)
            return str(value) if value is not None else None

        return cls(
            id=str(payload["id"]),
            provider=str(payload["provider"]),
            name=str(payload.get("name") or ""),
            email=optional("email"),
            avatar=optional("avatar"),
            username=optional("username"),
        )


@dataclass(frozen=True, slots=True)
class QuestionBatch:
    """Snapshot of the question pool together with where it came from."""

    questions: tuple[QuizQuestion, ...]
    source: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def with_source(self, source: str) -> "QuestionBatch":
        return QuestionBatch(questions=self.questions, source=source, fetched_at=self.fetched_at)
