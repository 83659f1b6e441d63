"""
Unit Tests for Seeded Randomization

Tests for Randomizer, CHOOSE_ALL and seed derivation.
"""

from collections import Counter

import pytest

from exam_toolkit.core.errors import SelectionRangeError
from exam_toolkit.core.models import Exam
from exam_toolkit.core.randomization import (
    CHOOSE_ALL,
    Randomizer,
    question_choice_randomizer,
    section_choice_randomizer,
)


POOL = ["a", "b", "c", "d", "e", "f"]


class TestChooseN:
    """Tests for Randomizer.choose_n."""

    def test_choose_n_when_same_seed_then_same_result(self):
        """Two randomizers with one seed make identical choices."""
        r1 = Randomizer("abc123_final")
        r2 = Randomizer("abc123_final")

        assert [r1.choose_n(POOL, 3) for _ in range(5)] == [r2.choose_n(POOL, 3) for _ in range(5)]

    def test_choose_n_when_called_then_preserves_pool_order(self):
        """Chosen items keep their relative pool order."""
        chosen = Randomizer("order").choose_n(POOL, 4)

        assert chosen == sorted(chosen, key=POOL.index)
        assert len(set(chosen)) == 4

    def test_choose_n_when_k_equals_pool_then_returns_everything(self):
        assert Randomizer("all").choose_n(POOL, len(POOL)) == POOL

    def test_choose_n_when_k_zero_then_returns_empty(self):
        assert Randomizer("none").choose_n(POOL, 0) == []

    @pytest.mark.parametrize("n,k", [(0, 1), (1, 2), (3, 4), (6, 7), (6, 100)])
    def test_choose_n_when_k_exceeds_pool_then_raises(self, n, k):
        """Over-drawing always fails, for every K > N >= 0."""
        with pytest.raises(SelectionRangeError):
            Randomizer("overdraw").choose_n(POOL[:n], k)

    def test_choose_n_when_k_negative_then_raises(self):
        with pytest.raises(SelectionRangeError):
            Randomizer("negative").choose_n(POOL, -1)

    def test_choose_n_when_different_seeds_then_varies(self):
        """Across many seeds every item gets chosen at some point."""
        counts = Counter()
        for i in range(200):
            counts.update(Randomizer(f"student{i}").choose_n(POOL, 1))

        assert set(counts) == set(POOL)


class TestChooseWeighted:
    """Tests for Randomizer.choose_weighted."""

    def test_choose_weighted_when_zero_weight_then_never_chosen(self):
        weights = [1, 0, 1, 0, 1, 0]
        for i in range(100):
            chosen = Randomizer(f"w{i}").choose_weighted(POOL, weights, 2)
            assert "b" not in chosen and "d" not in chosen and "f" not in chosen
            assert len(chosen) == 2

    def test_choose_weighted_when_heavy_weight_then_chosen_more_often(self):
        counts = Counter()
        for i in range(500):
            counts.update(Randomizer(f"heavy{i}").choose_weighted(["x", "y"], [9, 1], 1))

        assert counts["x"] > counts["y"] * 3

    def test_choose_weighted_when_same_seed_then_same_result(self):
        weights = [1, 2, 3, 4, 5, 6]
        r1 = Randomizer("seed")
        r2 = Randomizer("seed")
        assert r1.choose_weighted(POOL, weights, 3) == r2.choose_weighted(POOL, weights, 3)

    def test_choose_weighted_when_too_few_positive_weights_then_raises(self):
        with pytest.raises(SelectionRangeError):
            Randomizer("few").choose_weighted(POOL, [1, 0, 0, 0, 0, 0], 2)

    def test_choose_weighted_when_weight_count_mismatch_then_raises(self):
        with pytest.raises(ValueError, match="weights"):
            Randomizer("mismatch").choose_weighted(POOL, [1, 2], 1)

    def test_choose_weighted_when_negative_weight_then_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            Randomizer("neg").choose_weighted(["a", "b"], [1, -1], 1)


class TestChooseAll:
    """Tests for the CHOOSE_ALL randomizer."""

    def test_choose_all_when_choose_n_then_returns_whole_pool(self):
        assert CHOOSE_ALL.choose_n(POOL, 2) == POOL

    def test_choose_all_when_weighted_then_returns_whole_pool(self):
        assert CHOOSE_ALL.choose_weighted(POOL, [0, 0, 0, 0, 0, 1], 1) == POOL

    def test_choose_all_when_overdraw_then_still_raises(self):
        with pytest.raises(SelectionRangeError):
            CHOOSE_ALL.choose_n(POOL, 7)


class TestSeedDerivation:
    """Tests for per-purpose randomizer seeds."""

    @pytest.fixture
    def exam(self) -> Exam:
        return Exam.create({
            "exam_id": "final",
            "sections": [{"section_id": "s1", "questions": [{"question_id": "q1", "points": 1}]}],
        })

    def test_section_choice_seed_includes_exam_id(self, exam):
        assert section_choice_randomizer("abc123", exam).seed == "abc123_final"

    def test_question_choice_seed_includes_section_id(self, exam):
        section = exam.sections[0].choices[0]
        assert question_choice_randomizer("abc123", exam, section).seed == "abc123_final_s1"
