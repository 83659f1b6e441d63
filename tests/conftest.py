import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import exam_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_toolkit.core.models import StudentInfo


def question_spec(question_id: str, points: float, **extra) -> dict:
    """Minimal question specification dict."""
    spec = {
        "question_id": question_id,
        "points": points,
        "mk_description": f"[{question_id}]",
        "response": {"kind": "multiple_choice", "choices": ["a", "b"], "multiple": False},
    }
    spec.update(extra)
    return spec


# Common test fixtures
@pytest.fixture
def students() -> list[StudentInfo]:
    """Return a small roster."""
    return [
        StudentInfo("alice1", "Alice Anders"),
        StudentInfo("bob2", "Bob Baker"),
    ]


@pytest.fixture
def simple_exam_spec() -> dict:
    """One fixed section with two fixed questions worth 3 and 5 points."""
    return {
        "exam_id": "simple_test",
        "title": "[Title]",
        "mk_instructions": "[Instructions]",
        "sections": [
            {
                "section_id": "section",
                "title": "[Section Title]",
                "mk_description": "[Section Description]",
                "questions": [
                    question_spec("q_three", 3),
                    question_spec("q_five", 5),
                ],
            }
        ],
    }


@pytest.fixture
def randomized_exam_spec() -> dict:
    """
    Exam whose sections, questions and skins are all randomized, while
    every possible selection is worth 10 points.
    """
    return {
        "exam_id": "random_test",
        "title": "[Title]",
        "sections": [
            {
                "component_kind": "chooser",
                "strategy": "random",
                "n": 1,
                "choices": [
                    {
                        "section_id": "sec_a",
                        "skin": {
                            "component_kind": "chooser",
                            "strategy": "random",
                            "n": 1,
                            "choices": [
                                {"skin_id": "red", "replacements": {"color": "red"}},
                                {"skin_id": "blue", "replacements": {"color": "blue"}},
                            ],
                        },
                        "questions": [
                            {
                                "component_kind": "chooser",
                                "strategy": "random",
                                "n": 2,
                                "choices": [
                                    question_spec("a1", 2),
                                    question_spec("a2", 2),
                                    question_spec("a3", 2),
                                    question_spec("a4", 2),
                                ],
                            },
                        ],
                    },
                    {
                        "section_id": "sec_b",
                        "questions": [question_spec("b1", 4)],
                    },
                ],
            },
            {
                "section_id": "fixed_sec",
                "questions": [
                    question_spec(
                        "f1",
                        6,
                        skin={
                            "component_kind": "chooser",
                            "strategy": "random",
                            "n": 1,
                            "choices": [
                                {"skin_id": "x", "replacements": {"var": "x"}},
                                {"skin_id": "y", "replacements": {"var": "y"}},
                                {"skin_id": "z", "replacements": {"var": "z"}},
                            ],
                        },
                    ),
                ],
            },
        ],
    }


@pytest.fixture
def many_students() -> list[StudentInfo]:
    return [StudentInfo(f"student{i:02d}", f"Student {i}") for i in range(30)]
