"""Score a quiz selection against the answers a user submitted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from trivia_quiz.constants.quiz_constants import TIER_ORDER, TIER_OTHER
from trivia_quiz.core.models import ScoreSummary, SelectionResult, TierBreakdown, UserAnswer


@dataclass(slots=True)
class _TierTally:
    """Mutable per-tier counter used while scoring."""

    correct: int = 0
    total: int = 0
    points: int = 0

    def freeze(self) -> TierBreakdown:
        return TierBreakdown(correct=self.correct, total=self.total, points=self.points)


def build_user_answers(pairs: Iterable[tuple[int, int]]) -> list[UserAnswer]:
    """Convert ``(question_id, selected_option_index)`` pairs into answers."""
    return [UserAnswer(question_id=qid, selected_option_index=option) for qid, option in pairs]


def latest_answers(answers: Iterable[UserAnswer]) -> dict[int, int]:
    """Map question id to selected option; later answers replace earlier ones."""
    chosen: dict[int, int] = {}
    for answer in answers:
        chosen[answer.question_id] = answer.selected_option_index
    return chosen


def score_quiz(selection: SelectionResult, answers: Iterable[UserAnswer]) -> ScoreSummary:
    """Compute the score summary for ``selection``.

    Answers for questions outside the selection are ignored. The percentage is
    0 when the selection carries no points.
    """
    chosen = latest_answers(answers)
    tallies: dict[str, _TierTally] = {tier: _TierTally() for tier in TIER_ORDER}

    total_score = 0
    max_score = 0
    answered_count = 0
    for question in selection.questions:
        tally = tallies.setdefault(question.tier, _TierTally())
        tally.total += 1
        max_score += question.score

        selected = chosen.get(question.id)
        if selected is None:
            continue
        answered_count += 1
        if selected == question.correct_option_index:
            total_score += question.score
            tally.correct += 1
            tally.points += question.score

    percentage = (total_score / max_score) * 100 if max_score > 0 else 0.0
    ordered_tiers = [*TIER_ORDER, TIER_OTHER]
    return ScoreSummary(
        total_score=total_score,
        max_score=max_score,
        answered_count=answered_count,
        total_count=len(selection.questions),
        percentage=percentage,
        tier_breakdown=tuple(
            (tier, tallies[tier].freeze()) for tier in ordered_tiers if tier in tallies
        ),
    )
