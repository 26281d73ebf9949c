"""Turn raw spreadsheet rows into validated quiz questions.

Sheet layout (one question per row, optional header row first):

    Question | Option 1 | Option 2 | Option 3 | Option 4 | Correct answer | Difficulty

    - Empty option cells are dropped; at least two options must remain.
    - ``Correct answer`` is either a zero-based option index or the option text
      (matched case-insensitively). Text that matches no option falls back to
      the first option.
    - ``Difficulty`` is either a positive integer weight or one of
      easy / medium / hard (5 / 10 / 20). Missing values weigh 10.
    - Numeric cells may carry decimals, which are truncated (``2.0`` is 2).

Example:

    What is the capital of France? | London | Berlin | Paris | Madrid | Paris | easy

Rows that do not describe a valid question are skipped and logged; they never
reach the selector.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, Sequence

from trivia_quiz.constants.quiz_constants import DEFAULT_SCORE, SCORE_BY_DIFFICULTY
from trivia_quiz.constants.sheet_constants import (
    CORRECT_ANSWER_COLUMN,
    MIN_ROW_CELLS,
    OPTION_COLUMNS,
    WEIGHTAGE_COLUMN,
)
from trivia_quiz.core.models import QuizQuestion

logger = logging.getLogger(__name__)

# Sheets renders whole numbers as "2" or "2.0"; no exponents or digit separators.
_NUMBER_PATTERN = re.compile(r"(?P<whole>-?[0-9]+)(?:\.[0-9]*)?")

RawRow = Sequence[object]


class QuestionRowError(ValueError):
    """Raised when a sheet row cannot be turned into a question."""


def normalize_rows(rows: Sequence[RawRow] | None) -> list[QuizQuestion]:
    """Convert sheet rows to questions, dropping the ones that are invalid."""
    if not rows:
        return []

    start = 1 if _is_header(rows[0]) else 0
    questions: list[QuizQuestion] = []
    for row_index in range(start, len(rows)):
        row = rows[row_index]
        if not row or len(row) < MIN_ROW_CELLS:
            continue
        question_id = row_index - start + 1
        try:
            question = parse_row(row, question_id)
        except QuestionRowError as exc:
            logger.warning("Skipping invalid question at row %d: %s", row_index + 1, exc)
            continue
        questions.append(question)

    logger.info("Normalized %d valid questions from %d sheet rows", len(questions), len(rows))
    return questions


def parse_row(row: RawRow, question_id: int) -> QuizQuestion:
    """Parse a single data row; raises ``QuestionRowError`` when it is invalid."""
    question_text = _cell(row, 0)
    options = tuple(
        option for option in (_cell(row, column) for column in OPTION_COLUMNS) if option
    )
    correct_index = _parse_correct_answer(_cell(row, CORRECT_ANSWER_COLUMN), options)
    score = _parse_score(_cell(row, WEIGHTAGE_COLUMN))

    question = QuizQuestion(
        id=question_id,
        question_text=question_text,
        options=options,
        correct_option_index=correct_index,
        score=score,
    )
    if not question_text:
        raise QuestionRowError("question text is empty")
    if len(options) < 2:
        raise QuestionRowError(f"expected at least two options, got {len(options)}")
    if not question.is_valid():
        raise QuestionRowError(
            f"correct answer {correct_index} / weightage {score} out of range"
        )
    return question


def describe_pool(questions: Iterable[QuizQuestion]) -> dict[str, object]:
    """Summarize a question pool for the statistics endpoint."""
    scores = [question.score for question in questions]
    total = sum(scores)
    distribution = Counter(scores)
    return {
        "totalQuestions": len(scores),
        "totalWeightage": total,
        "averageWeightage": round(total / len(scores), 2) if scores else 0,
        "weightageDistribution": {
            str(score): distribution[score] for score in sorted(distribution)
        },
    }


def _is_header(row: RawRow) -> bool:
    return bool(row) and "question" in _cell(row, 0).lower()


def _cell(row: RawRow, column: int) -> str:
    if column >= len(row) or row[column] is None:
        return ""
    return str(row[column]).strip()


def _parse_number(raw_value: str) -> int | None:
    """Read a numeric cell, truncating decimals (``2.0`` is 2, ``7.5`` is 7)."""
    match = _NUMBER_PATTERN.fullmatch(raw_value)
    if match is None:
        return None
    return int(match.group("whole"))


def _parse_correct_answer(raw_value: str, options: tuple[str, ...]) -> int:
    if not raw_value:
        raise QuestionRowError("correct answer is missing")
    as_index = _parse_number(raw_value)
    if as_index is not None:
        return as_index
    lowered = raw_value.lower()
    for index, option in enumerate(options):
        if option.lower() == lowered:
            return index
    logger.debug("Correct answer %r matches no option; using the first option", raw_value)
    return 0


def _parse_score(raw_value: str) -> int:
    if not raw_value:
        return DEFAULT_SCORE
    as_number = _parse_number(raw_value)
    if as_number is not None:
        return as_number
    difficulty = raw_value.lower()
    if difficulty in SCORE_BY_DIFFICULTY:
        return SCORE_BY_DIFFICULTY[difficulty]
    logger.warning(
        "Unknown difficulty level %r, using default weightage of %d", raw_value, DEFAULT_SCORE
    )
    return DEFAULT_SCORE
