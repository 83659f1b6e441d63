"""
Unit Tests for Schema Validation

Tests for exam specification and manifest validation.
"""

import copy

import pytest

from exam_toolkit.core.schemas.validator import (
    ValidationError,
    validate_exam_specification,
    validate_manifest,
)


@pytest.fixture
def valid_manifest() -> dict:
    return {
        "exam_id": "final",
        "uuid": "abc123-final",
        "student": {"uniqname": "abc123", "name": "Alice"},
        "pointsPossible": 3,
        "sections": [
            {
                "section_id": "s1",
                "uuid": "abc123-final-s-s1",
                "display_index": "1",
                "skin_id": "default",
                "questions": [
                    {
                        "question_id": "q1",
                        "uuid": "abc123-final-q-q1",
                        "display_index": "1.1",
                        "kind": None,
                        "skin_id": "default-default",
                        "pointsPossible": 3,
                        "response": "",
                    }
                ],
            }
        ],
    }


class TestValidateExamSpecification:
    """Tests for validate_exam_specification()."""

    def test_validate_when_simple_spec_then_passes(self, simple_exam_spec):
        validate_exam_specification(simple_exam_spec)
        validate_exam_specification(simple_exam_spec, strict=True)

    def test_validate_when_randomized_spec_then_passes(self, randomized_exam_spec):
        validate_exam_specification(randomized_exam_spec, strict=True)

    def test_validate_when_missing_exam_id_then_raises(self, simple_exam_spec):
        del simple_exam_spec["exam_id"]

        with pytest.raises(ValidationError, match="exam_id") as exc_info:
            validate_exam_specification(simple_exam_spec)
        assert exc_info.value.errors == ["Missing field: exam_id"]

    def test_validate_when_bad_question_id_then_reports_path(self, simple_exam_spec):
        simple_exam_spec["sections"][0]["questions"][1]["question_id"] = "2nd"

        with pytest.raises(ValidationError) as exc_info:
            validate_exam_specification(simple_exam_spec)
        assert exc_info.value.path == "sections[0].questions[1].question_id"

    def test_validate_when_negative_points_then_raises(self, simple_exam_spec):
        simple_exam_spec["sections"][0]["questions"][0]["points"] = -2

        with pytest.raises(ValidationError, match="points"):
            validate_exam_specification(simple_exam_spec)

    def test_validate_when_unknown_strategy_then_raises(self, randomized_exam_spec):
        randomized_exam_spec["sections"][0]["strategy"] = "shuffle"

        with pytest.raises(ValidationError) as exc_info:
            validate_exam_specification(randomized_exam_spec)
        assert exc_info.value.path == "sections[0].strategy"

    def test_validate_when_weighted_without_weights_then_raises(self, randomized_exam_spec):
        randomized_exam_spec["sections"][0]["strategy"] = "weighted"

        with pytest.raises(ValidationError, match="weights"):
            validate_exam_specification(randomized_exam_spec)

    def test_validate_when_choices_not_list_then_raises(self, randomized_exam_spec):
        randomized_exam_spec["sections"][0]["choices"] = 5

        with pytest.raises(ValidationError, match="choices") as exc_info:
            validate_exam_specification(randomized_exam_spec)
        assert exc_info.value.path == "sections[0].choices"

    @pytest.mark.parametrize("n", [1.0, "1", True, -1])
    def test_validate_when_n_not_count_then_raises(self, randomized_exam_spec, n):
        randomized_exam_spec["sections"][0]["n"] = n

        with pytest.raises(ValidationError) as exc_info:
            validate_exam_specification(randomized_exam_spec, strict=True)
        assert exc_info.value.path == "sections[0].n"

    def test_validate_when_skin_without_id_then_raises(self, randomized_exam_spec):
        skins = randomized_exam_spec["sections"][0]["choices"][0]["skin"]["choices"]
        del skins[1]["skin_id"]

        with pytest.raises(ValidationError) as exc_info:
            validate_exam_specification(randomized_exam_spec)
        assert exc_info.value.path == "sections[0].choices[0].skin.choices[1]"

    def test_validate_strict_when_wrong_type_then_raises(self, simple_exam_spec):
        simple_exam_spec["title"] = 42

        validate_exam_specification(simple_exam_spec)
        with pytest.raises(ValidationError, match="Schema validation failed"):
            validate_exam_specification(simple_exam_spec, strict=True)


class TestValidateManifest:
    """Tests for validate_manifest()."""

    def test_validate_when_valid_then_passes(self, valid_manifest):
        validate_manifest(valid_manifest)
        validate_manifest(valid_manifest, strict=True)

    def test_validate_when_student_missing_name_then_raises(self, valid_manifest):
        del valid_manifest["student"]["name"]

        with pytest.raises(ValidationError) as exc_info:
            validate_manifest(valid_manifest)
        assert exc_info.value.path == "student"

    def test_validate_when_question_missing_uuid_then_reports_path(self, valid_manifest):
        broken = copy.deepcopy(valid_manifest)
        del broken["sections"][0]["questions"][0]["uuid"]

        with pytest.raises(ValidationError) as exc_info:
            validate_manifest(broken)
        assert exc_info.value.path == "sections[0].questions[0]"

    def test_validate_strict_when_negative_points_then_raises(self, valid_manifest):
        valid_manifest["pointsPossible"] = -1

        with pytest.raises(ValidationError) as exc_info:
            validate_manifest(valid_manifest, strict=True)
        assert exc_info.value.path == "pointsPossible"
