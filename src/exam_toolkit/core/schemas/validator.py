"""
Schema Validation Utilities

Validates exam specification and manifest JSON data.

Two levels of checking:
- Basic (always): required fields and identifier formats, with error
  paths that point at the offending node
- Strict: full JSON Schema validation against the packaged
  `*.schema.json` files using jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.components import ID_PATTERN


_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _strict_validate(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def _require_fields(data: Any, required: list[str], path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Expected an object at {path or '<root>'}", path=path)
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )


def _check_id(value: Any, path: str) -> None:
    if not isinstance(value, str) or not ID_PATTERN.match(value):
        raise ValidationError(f"Invalid id: {value!r}", path=path)


def _is_chooser(data: Any) -> bool:
    return isinstance(data, dict) and data.get("component_kind") == "chooser"


# ─────────────────────────────────────────────────────────────────────────────
# Exam Specification
# ─────────────────────────────────────────────────────────────────────────────

def validate_exam_specification(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate an exam specification dict.

    Args:
        data: Parsed exam specification (regexes already decoded)
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    _require_fields(data, ["exam_id", "sections"], "")
    _check_id(data["exam_id"], "exam_id")

    if not isinstance(data["sections"], list):
        raise ValidationError("sections must be a list", path="sections")
    for i, entry in enumerate(data["sections"]):
        _validate_entry(entry, f"sections[{i}]", _validate_section)

    if strict:
        _strict_validate(data, "exam_specification")


def _validate_entry(entry: Any, path: str, validate_item) -> None:
    if _is_chooser(entry):
        _require_fields(entry, ["choices"], path)
        strategy = entry.get("strategy", "random")
        if strategy not in ("all", "random", "weighted"):
            raise ValidationError(f"Unknown chooser strategy: {strategy!r}", path=f"{path}.strategy")
        if strategy == "weighted" and "weights" not in entry:
            raise ValidationError("Weighted chooser requires weights", path=f"{path}.weights")
        n = entry.get("n", 1)
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValidationError(
                f"Invalid n: {n!r} (must be a non-negative integer)",
                path=f"{path}.n",
            )
        if not isinstance(entry["choices"], list):
            raise ValidationError("choices must be a list", path=f"{path}.choices")
        for j, choice in enumerate(entry["choices"]):
            validate_item(choice, f"{path}.choices[{j}]")
    else:
        validate_item(entry, path)


def _validate_section(data: Any, path: str) -> None:
    _require_fields(data, ["section_id", "questions"], path)
    _check_id(data["section_id"], f"{path}.section_id")
    if "skin" in data:
        _validate_entry(data["skin"], f"{path}.skin", _validate_skin)
    if not isinstance(data["questions"], list):
        raise ValidationError("questions must be a list", path=f"{path}.questions")
    for i, entry in enumerate(data["questions"]):
        _validate_entry(entry, f"{path}.questions[{i}]", _validate_question)


def _validate_question(data: Any, path: str) -> None:
    _require_fields(data, ["question_id", "points"], path)
    _check_id(data["question_id"], f"{path}.question_id")
    points = data["points"]
    if isinstance(points, bool) or not isinstance(points, (int, float)) or points < 0:
        raise ValidationError(
            f"Invalid points: {points!r} (must be a non-negative number)",
            path=f"{path}.points",
        )
    if "skin" in data:
        _validate_entry(data["skin"], f"{path}.skin", _validate_skin)


def _validate_skin(data: Any, path: str) -> None:
    _require_fields(data, ["skin_id"], path)
    _check_id(data["skin_id"], f"{path}.skin_id")
    if not isinstance(data.get("replacements", {}), dict):
        raise ValidationError("replacements must be an object", path=f"{path}.replacements")


# ─────────────────────────────────────────────────────────────────────────────
# Manifest
# ─────────────────────────────────────────────────────────────────────────────

def validate_manifest(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate an assigned-exam manifest (or a submission in manifest shape).

    Args:
        data: Manifest dictionary
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    _require_fields(data, ["exam_id", "uuid", "student", "sections"], "")
    _require_fields(data["student"], ["uniqname", "name"], "student")

    for i, section in enumerate(data["sections"]):
        _require_fields(section, ["section_id", "uuid", "questions"], f"sections[{i}]")
        for j, question in enumerate(section["questions"]):
            _require_fields(
                question,
                ["question_id", "uuid"],
                f"sections[{i}].questions[{j}]",
            )

    if strict:
        _strict_validate(data, "manifest")
