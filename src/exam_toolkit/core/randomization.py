"""
Module: core.randomization

Purpose:
    Seeded, reproducible selection primitive used by every chooser.
    A Randomizer keyed by the same seed string always makes the same
    choices for the same sequence of requests, independent of process,
    platform or unrelated randomness elsewhere in the program.

Key Functions:
    - section_choice_randomizer(): Seed for choosing an exam's sections
    - question_choice_randomizer(): Seed for choosing a section's questions
    - section_skin_randomizer(): Seed for choosing a section's skin
    - question_skin_randomizer(): Seed for choosing a question's skin

Key Classes:
    - Randomizer: Seeded sampling without replacement
    - CHOOSE_ALL: Randomizer that always returns the whole pool

Dependencies:
    - random (std): String seeds are hashed with SHA-512, so sequences
      are stable across interpreter runs

Used By:
    - core.models.choosers
    - builder.assignment
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence, TypeVar

from .errors import SelectionRangeError

if TYPE_CHECKING:
    from .models.components import Exam, Question, Section

T = TypeVar("T")


def _check_range(pool_size: int, k: int) -> None:
    if k < 0:
        raise SelectionRangeError(f"Cannot choose a negative number of items: {k}")
    if k > pool_size:
        raise SelectionRangeError(
            f"Cannot choose {k} items from a pool of only {pool_size}"
        )


@dataclass
class Randomizer:
    """
    Seeded selection without replacement.

    Selected items are always returned in their original pool order, so the
    seed only decides *which* items are chosen, never how the author ordered
    them.

    Attributes:
        seed: Seed string (e.g. "abc123_exam_final")
        choose_all: If True, every request returns the whole pool and the
            seed is never consulted

    Example:
        >>> r1 = Randomizer("abc123_final")
        >>> r2 = Randomizer("abc123_final")
        >>> r1.choose_n(["a", "b", "c", "d"], 2) == r2.choose_n(["a", "b", "c", "d"], 2)
        True
    """

    seed: str
    choose_all: bool = False

    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def choose_n(self, pool: Sequence[T], k: int) -> List[T]:
        """
        Choose k items from pool without replacement.

        Raises:
            SelectionRangeError: If k < 0 or k > len(pool)
        """
        _check_range(len(pool), k)
        if self.choose_all:
            return list(pool)
        indices = sorted(self._rng.sample(range(len(pool)), k))
        return [pool[i] for i in indices]

    def choose_weighted(
        self,
        pool: Sequence[T],
        weights: Sequence[float],
        k: int,
    ) -> List[T]:
        """
        Choose k items from pool without replacement, weighted.

        Each draw picks among the remaining items with probability
        proportional to its weight. Zero-weight items are never chosen.

        Raises:
            ValueError: If weights don't match pool or any weight is negative
            SelectionRangeError: If k < 0, k > len(pool), or fewer than k
                items carry a positive weight
        """
        if len(weights) != len(pool):
            raise ValueError(
                f"Got {len(weights)} weights for a pool of {len(pool)} items"
            )
        if any(w < 0 for w in weights):
            raise ValueError(f"Weights must be non-negative: {list(weights)}")
        _check_range(len(pool), k)
        if self.choose_all:
            return list(pool)

        remaining = [i for i, w in enumerate(weights) if w > 0]
        if len(remaining) < k:
            raise SelectionRangeError(
                f"Cannot choose {k} items when only {len(remaining)} have positive weight"
            )

        chosen: List[int] = []
        for _ in range(k):
            total = sum(weights[i] for i in remaining)
            target = self._rng.random() * total
            pick = remaining[-1]
            cumulative = 0.0
            for i in remaining:
                cumulative += weights[i]
                if target < cumulative:
                    pick = i
                    break
            remaining.remove(pick)
            chosen.append(pick)

        return [pool[i] for i in sorted(chosen)]


CHOOSE_ALL = Randomizer(seed="choose_all", choose_all=True)


# ─────────────────────────────────────────────────────────────────────────────
# Seed Derivation
# ─────────────────────────────────────────────────────────────────────────────

def section_choice_randomizer(seed: str, exam: Exam) -> Randomizer:
    return Randomizer(f"{seed}_{exam.exam_id}")


def question_choice_randomizer(seed: str, exam: Exam, section: Section) -> Randomizer:
    return Randomizer(f"{seed}_{exam.exam_id}_{section.section_id}")


def section_skin_randomizer(seed: str, exam: Exam, section: Section) -> Randomizer:
    return Randomizer(f"{seed}_{exam.exam_id}_{section.section_id}_skin")


def question_skin_randomizer(seed: str, exam: Exam, question: Question) -> Randomizer:
    return Randomizer(f"{seed}_{exam.exam_id}_{question.question_id}_skin")
