"""
Tests for the target-score question selector.
"""

from itertools import combinations
import random

import pytest

from trivia_quiz.core.fallback_questions import FALLBACK_QUESTIONS
from trivia_quiz.core.question_selector import select_questions

from conftest import make_question


class TestSelectionSize:
    @pytest.mark.parametrize("count", [0, 1, 5, 10, 19, 20])
    def test_returns_exactly_count_when_pool_is_large_enough(self, tiered_pool, count):
        result = select_questions(tiered_pool, target_score=100, count=count, rng=random.Random(count))

        assert len(result) == count
        assert result.requested_count == count
        assert not result.is_underfilled

    def test_negative_count_gives_empty_result(self, tiered_pool, rng):
        result = select_questions(tiered_pool, target_score=100, count=-3, rng=rng)

        assert len(result) == 0
        assert not result.is_underfilled

    def test_empty_pool_gives_empty_result(self, rng):
        result = select_questions([], target_score=100, count=10, rng=rng)

        assert result.questions == ()
        assert result.total_score == 0

    def test_underfilled_pool_returns_whole_pool_shuffled(self, rng):
        pool = [make_question(i, 5) for i in range(1, 5)]

        result = select_questions(pool, target_score=100, count=10, rng=rng)

        assert len(result) == 4
        assert sorted(result.question_ids) == [1, 2, 3, 4]
        assert result.is_underfilled
        assert not result.is_exact_match


class TestSelectionContents:
    def test_ids_are_distinct_and_from_pool(self, tiered_pool):
        pool_ids = {q.id for q in tiered_pool}
        for seed in range(25):
            result = select_questions(tiered_pool, 100, 10, rng=random.Random(seed))
            ids = result.question_ids
            assert len(set(ids)) == len(ids)
            assert set(ids) <= pool_ids

    def test_pool_is_not_mutated(self, tiered_pool, rng):
        before = list(tiered_pool)

        select_questions(tiered_pool, 100, 10, rng=rng)

        assert tiered_pool == before


class TestExactMatch:
    def test_exact_target_found_when_constructible(self):
        # ten questions of 10 points always reach 100; extra 5s and 20s are distractors
        pool = [make_question(i, 10) for i in range(1, 11)]
        pool += [make_question(i, 5) for i in range(11, 16)]
        pool += [make_question(i, 20) for i in range(16, 19)]

        hits = 0
        for seed in range(10):
            result = select_questions(pool, target_score=100, count=10, rng=random.Random(seed))
            if result.total_score == 100:
                hits += 1

        assert hits >= 9

    def test_exact_target_found_for_every_seed_with_mixed_tiers(self, tiered_pool):
        for seed in range(50):
            result = select_questions(tiered_pool, 100, 10, rng=random.Random(seed))
            assert result.total_score == 100
            assert result.is_exact_match

    def test_fallback_bank_supports_default_quiz(self):
        result = select_questions(FALLBACK_QUESTIONS, rng=random.Random(7))

        assert len(result) == 10
        assert result.total_score == 100

    def test_different_seeds_vary_the_selection(self, tiered_pool):
        selections = {
            frozenset(select_questions(tiered_pool, 100, 10, rng=random.Random(seed)).question_ids)
            for seed in range(20)
        }

        assert len(selections) > 1

    def test_same_seed_is_reproducible(self, tiered_pool):
        first = select_questions(tiered_pool, 100, 10, rng=random.Random(99))
        second = select_questions(tiered_pool, 100, 10, rng=random.Random(99))

        assert first.question_ids == second.question_ids


class TestClosestSumFallback:
    def test_infeasible_target_still_returns_count(self):
        pool = [make_question(i, 5) for i in range(1, 9)]

        for seed in range(10):
            result = select_questions(pool, target_score=16, count=3, rng=random.Random(seed))
            assert len(result) == 3
            assert result.total_score == 15
            assert not result.is_exact_match

    def test_closest_total_is_chosen(self):
        # reachable 2-question totals: 10, 25, 40; target 30 is closest to 25
        pool = [make_question(1, 5), make_question(2, 5), make_question(3, 20), make_question(4, 20)]

        result = select_questions(pool, target_score=30, count=2, rng=random.Random(3))

        assert result.total_score == 25

    def test_target_above_every_total_uses_largest(self, tiered_pool, rng):
        result = select_questions(tiered_pool, target_score=1000, count=5, rng=rng)

        assert result.total_score == 4 * 20 + 10

    def test_equidistant_totals_both_occur(self):
        # reachable totals 10, 30 and 50; 10 and 30 are both 10 away from 20
        pool = [make_question(1, 5), make_question(2, 5), make_question(3, 25), make_question(4, 25)]

        totals = {
            select_questions(pool, target_score=20, count=2, rng=random.Random(seed)).total_score
            for seed in range(40)
        }

        assert totals == {10, 30}


class TestArbitraryWeights:
    def test_large_pool_with_wide_weights_finds_exact_target(self):
        generator = random.Random(5)
        scores = [10] * 10 + [generator.randint(101, 1000) for _ in range(90)]
        pool = [make_question(i + 1, score) for i, score in enumerate(scores)]

        result = select_questions(pool, target_score=100, count=10, rng=random.Random(8))

        assert len(result) == 10
        assert result.total_score == 100

    def test_large_pool_above_target_uses_smallest_total(self):
        generator = random.Random(6)
        scores = [generator.randint(200, 1000) for _ in range(100)]
        pool = [make_question(i + 1, score) for i, score in enumerate(scores)]

        result = select_questions(pool, target_score=100, count=10, rng=random.Random(2))

        assert result.total_score == sum(sorted(scores)[:10])

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_best_gap_of_every_combination(self, seed):
        generator = random.Random(seed)
        scores = [generator.randint(1, 1000) for _ in range(14)]
        pool = [make_question(i + 1, score) for i, score in enumerate(scores)]
        target = generator.randint(500, 2500)
        best_gap = min(abs(sum(combo) - target) for combo in combinations(scores, 4))

        result = select_questions(pool, target_score=target, count=4, rng=random.Random(seed))

        assert len(result) == 4
        assert abs(result.total_score - target) == best_gap
