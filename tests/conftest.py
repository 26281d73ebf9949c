import random

import pytest

from trivia_quiz.core.models import QuizQuestion


def make_question(qid: int, score: int, correct: int = 0, options: int = 4) -> QuizQuestion:
    """Helper to create test questions."""
    return QuizQuestion(
        id=qid,
        question_text=f"Question {qid}?",
        options=tuple(f"Option {i}" for i in range(options)),
        correct_option_index=correct,
        score=score,
    )


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def tiered_pool() -> list[QuizQuestion]:
    """Eight easy, eight medium and four hard questions (same mix as the fallback bank)."""
    scores = [5] * 8 + [10] * 8 + [20] * 4
    return [make_question(i + 1, score) for i, score in enumerate(scores)]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
