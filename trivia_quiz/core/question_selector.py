"""Pick a fixed-size set of questions whose scores add up to a target.

Selection works on a table of reachable sums: ``reachable[i][k]`` holds every
total that can be built from exactly ``k`` of the first ``i`` (shuffled)
questions. With that table:

    1. Exact match: if ``target_score`` is reachable with ``count`` questions,
       a subset with that total is rebuilt from the table.
    2. Closest sum: otherwise the reachable total nearest to the target is
       used instead. Equally distant totals (one below, one above) are picked
       at random.
    3. The rebuilt subset is shuffled into its presentation order.

Each cell keeps the totals up to ``target_score`` plus the smallest total above
it. A total already past the target only moves further away as questions are
added, so larger ones can never be the closest. The table is therefore bounded
by ``len(pool) * count * (target_score + 2)`` whatever the weights are.
Randomness comes only from the ``rng`` argument so callers can seed it.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from trivia_quiz.constants.quiz_constants import DEFAULT_QUESTION_COUNT, DEFAULT_TARGET_SCORE
from trivia_quiz.core.models import QuizQuestion, SelectionResult

logger = logging.getLogger(__name__)

_SumTable = list[list[set[int]]]


def select_questions(
    pool: Sequence[QuizQuestion],
    target_score: int = DEFAULT_TARGET_SCORE,
    count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Return ``count`` distinct questions whose scores sum as close to ``target_score`` as possible.

    Never raises for well-formed input. ``count <= 0`` or an empty pool yields an
    empty result; a pool smaller than ``count`` is returned whole in random order
    (check ``SelectionResult.is_underfilled``).
    """
    rng = rng or random.Random()
    candidates = list(pool)
    if count <= 0 or not candidates:
        return SelectionResult(questions=(), target_score=target_score, requested_count=count)

    rng.shuffle(candidates)
    if count >= len(candidates):
        if count > len(candidates):
            logger.info(
                "Pool has %d questions but %d were requested; using the whole pool",
                len(candidates),
                count,
            )
        return SelectionResult(
            questions=tuple(candidates), target_score=target_score, requested_count=count
        )

    table = _build_reachable_sums(candidates, count, target_score)
    chosen_sum = _closest_reachable_sum(table[-1][count], target_score, rng)
    if chosen_sum != target_score:
        logger.debug(
            "No %d-question set sums to %d; using closest total %d",
            count,
            target_score,
            chosen_sum,
        )

    chosen = _rebuild_subset(candidates, table, count, chosen_sum, rng)
    rng.shuffle(chosen)
    return SelectionResult(questions=tuple(chosen), target_score=target_score, requested_count=count)


def _build_reachable_sums(
    candidates: list[QuizQuestion], count: int, target_score: int
) -> _SumTable:
    first_row: list[set[int]] = [set() for _ in range(count + 1)]
    first_row[0].add(0)
    table: _SumTable = [first_row]
    for position, question in enumerate(candidates, start=1):
        previous = table[-1]
        row = [set(sums) for sums in previous]
        for taken in range(1, min(position, count) + 1):
            row[taken].update(total + question.score for total in previous[taken - 1])
            row[taken] = _bounded(row[taken], target_score)
        table.append(row)
    return table


def _bounded(sums: set[int], target_score: int) -> set[int]:
    above = [total for total in sums if total > target_score]
    if len(above) <= 1:
        return sums
    kept = {total for total in sums if total <= target_score}
    kept.add(min(above))
    return kept


def _closest_reachable_sum(sums: set[int], target_score: int, rng: random.Random) -> int:
    best_gap = min(abs(total - target_score) for total in sums)
    ties = sorted(total for total in sums if abs(total - target_score) == best_gap)
    return ties[0] if len(ties) == 1 else rng.choice(ties)


def _rebuild_subset(
    candidates: list[QuizQuestion],
    table: _SumTable,
    count: int,
    total: int,
    rng: random.Random,
) -> list[QuizQuestion]:
    # Invariant: ``remaining`` is reachable with ``needed`` of the first ``position`` questions.
    chosen: list[QuizQuestion] = []
    needed = count
    remaining = total
    for position in range(len(candidates), 0, -1):
        if needed == 0:
            break
        question = candidates[position - 1]
        before = table[position - 1]
        can_take = (remaining - question.score) in before[needed - 1]
        can_skip = remaining in before[needed]
        if can_take and (not can_skip or rng.random() < 0.5):
            chosen.append(question)
            needed -= 1
            remaining -= question.score
    return chosen
