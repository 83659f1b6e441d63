"""
Unit Tests for Choosers

Tests for Fixed, ChooseAll, ChooseN and WeightedChoice.
"""

import pytest

from exam_toolkit.core.errors import SelectionRangeError, SpecificationError
from exam_toolkit.core.models import (
    ChooseAll,
    ChooseN,
    Exam,
    Fixed,
    Question,
    Skin,
    StudentInfo,
    WeightedChoice,
    is_chooser,
)
from exam_toolkit.core.randomization import CHOOSE_ALL, Randomizer


@pytest.fixture
def exam() -> Exam:
    return Exam.create({
        "exam_id": "chooser_exam",
        "sections": [{"section_id": "s", "questions": [{"question_id": "q", "points": 1}]}],
    })


@pytest.fixture
def student() -> StudentInfo:
    return StudentInfo("abc123", "Alice")


@pytest.fixture
def questions() -> tuple[Question, ...]:
    return tuple(Question(f"q{i}", 1) for i in range(5))


class TestFixed:
    def test_choose_when_called_then_returns_item_and_ignores_randomizer(self, exam, student):
        q = Question("only", 2)
        chooser = Fixed(q)

        assert chooser.choose(exam, student, Randomizer("a")) == (q,)
        assert chooser.choose(exam, student, CHOOSE_ALL) == (q,)
        assert chooser.choices == (q,)


class TestChooseAll:
    def test_choose_when_called_then_returns_all_in_order(self, exam, student, questions):
        assert ChooseAll(questions).choose(exam, student, Randomizer("a")) == questions


class TestChooseN:
    def test_choose_when_seeded_then_returns_n_distinct(self, exam, student, questions):
        chosen = ChooseN(2, questions).choose(exam, student, Randomizer("seed"))

        assert len(chosen) == 2
        assert len({q.question_id for q in chosen}) == 2

    def test_choose_when_choose_all_randomizer_then_returns_pool(self, exam, student, questions):
        assert ChooseN(2, questions).choose(exam, student, CHOOSE_ALL) == questions

    @pytest.mark.parametrize("n", [-1, 6, 10])
    def test_init_when_n_out_of_range_then_raises(self, questions, n):
        with pytest.raises(SelectionRangeError):
            ChooseN(n, questions)

    @pytest.mark.parametrize("n", [1.0, True, "1"])
    def test_init_when_n_not_integer_then_specification_error(self, questions, n):
        with pytest.raises(SpecificationError, match="integer"):
            ChooseN(n, questions)

    def test_init_when_empty_pool_and_n_one_then_raises(self):
        with pytest.raises(SelectionRangeError):
            ChooseN(1, ())


class TestWeightedChoice:
    def test_choose_when_only_one_positive_weight_then_returns_it(self, exam, student):
        skins = (Skin("a"), Skin("b"), Skin("c"))
        chooser = WeightedChoice(1, skins, (0, 5, 0))

        for i in range(20):
            assert chooser.choose(exam, student, Randomizer(f"s{i}")) == (skins[1],)

    def test_init_when_weights_mismatch_then_raises(self):
        with pytest.raises(ValueError):
            WeightedChoice(1, (Skin("a"), Skin("b")), (1,))

    def test_init_when_n_exceeds_positive_weights_then_raises(self):
        with pytest.raises(SelectionRangeError):
            WeightedChoice(2, (Skin("a"), Skin("b")), (1, 0))


class TestIsChooser:
    def test_is_chooser_distinguishes_choosers_from_items(self, questions):
        assert is_chooser(Fixed(questions[0]))
        assert is_chooser(ChooseN(1, questions))
        assert not is_chooser(questions[0])
        assert not is_chooser(Skin("plain"))
