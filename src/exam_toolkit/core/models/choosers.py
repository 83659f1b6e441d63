"""
Module: choosers

Purpose:
    Selection policies over pools of sections, questions or skins. Every
    variant exposes the same `choose(exam, student, randomizer)` capability
    and returns an ordered tuple; callers never branch on the variant.

Key Classes:
    - Fixed: Always its single wrapped item
    - ChooseAll: The whole pool
    - ChooseN: n items, seeded
    - WeightedChoice: n items, seeded and weighted

Key Functions:
    - is_chooser(): Distinguish a chooser from a plain item

Dependencies:
    - core.randomization.Randomizer

Used By:
    - core.models.components: Parsing section/question/skin entries
    - builder.assignment: Per-student selection
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, Tuple, TypeVar, runtime_checkable

from ..errors import SelectionRangeError, SpecificationError
from ..randomization import Randomizer

if TYPE_CHECKING:
    from .components import Exam
    from .students import StudentInfo

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Chooser(Protocol[T_co]):
    """Anything that can pick an ordered subset of its choices."""

    @property
    def choices(self) -> Tuple[T_co, ...]:
        ...

    def choose(
        self,
        exam: Exam,
        student: StudentInfo,
        randomizer: Randomizer,
    ) -> Tuple[T_co, ...]:
        ...


def is_chooser(obj: Any) -> bool:
    """True for chooser nodes, False for plain sections/questions/skins."""
    return isinstance(obj, (Fixed, ChooseAll, ChooseN, WeightedChoice))


def _check_count(n: int, pool_size: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise SpecificationError(f"Chooser count must be an integer, got {n!r}")
    if n < 0 or n > pool_size:
        raise SelectionRangeError(
            f"Chooser asks for {n!r} items from a pool of {pool_size}"
        )


@dataclass(frozen=True)
class Fixed(Generic[T]):
    """Wraps a single item; ignores the randomizer."""

    item: T

    @property
    def choices(self) -> Tuple[T, ...]:
        return (self.item,)

    def choose(self, exam: Exam, student: StudentInfo, randomizer: Randomizer) -> Tuple[T, ...]:
        return (self.item,)


@dataclass(frozen=True)
class ChooseAll(Generic[T]):
    """Selects every choice, in order."""

    choices: Tuple[T, ...]

    def choose(self, exam: Exam, student: StudentInfo, randomizer: Randomizer) -> Tuple[T, ...]:
        return tuple(self.choices)


@dataclass(frozen=True)
class ChooseN(Generic[T]):
    """
    Selects n of the choices using the randomizer.

    Attributes:
        n: Number of items to select
        choices: Pool to select from

    Invariants:
        - 0 <= n <= len(choices)
    """

    n: int
    choices: Tuple[T, ...]

    def __post_init__(self) -> None:
        _check_count(self.n, len(self.choices))

    def choose(self, exam: Exam, student: StudentInfo, randomizer: Randomizer) -> Tuple[T, ...]:
        return tuple(randomizer.choose_n(self.choices, self.n))


@dataclass(frozen=True)
class WeightedChoice(Generic[T]):
    """
    Selects n of the choices, weighted, using the randomizer.

    Attributes:
        n: Number of items to select
        choices: Pool to select from
        weights: One non-negative weight per choice

    Invariants:
        - len(weights) == len(choices)
        - 0 <= n <= number of positively weighted choices
    """

    n: int
    choices: Tuple[T, ...]
    weights: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.weights) != len(self.choices):
            raise ValueError(
                f"WeightedChoice has {len(self.weights)} weights for {len(self.choices)} choices"
            )
        if any(w < 0 for w in self.weights):
            raise ValueError(f"Weights must be non-negative: {self.weights}")
        _check_count(self.n, sum(1 for w in self.weights if w > 0))

    def choose(self, exam: Exam, student: StudentInfo, randomizer: Randomizer) -> Tuple[T, ...]:
        return tuple(randomizer.choose_weighted(self.choices, self.weights, self.n))
