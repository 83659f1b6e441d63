"""
Serialization Utilities

File-shaped inputs and outputs of exam generation.

Inputs:
- Exam specification JSON. Regular expressions inside response
  specifications are stored as tagged objects:
  `{"__serialized_regex": {"source": "...", "flags": "i"}}`
- Roster CSV with a header row containing `uniqname` and `name`

Outputs:
- Manifest JSON (one per assigned exam)
- Stats JSON (usage counts per section/question id)
- `student-ids.csv` mapping uniqname to the generated filename base

Field names in these files are read back by the submission checker and
must not change.
"""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Any, Iterable

from ..models.components import Exam
from ..models.students import StudentInfo
from ..schemas.validator import validate_exam_specification, validate_manifest


REGEX_TAG = "__serialized_regex"

# JS-style flag letters understood in serialized regexes. Others ("g", "u", "y")
# have no Python equivalent and are dropped.
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


class RosterError(ValueError):
    """Raised when a roster file is malformed."""
    pass


# ─────────────────────────────────────────────────────────────────────────────
# Regex Encoding
# ─────────────────────────────────────────────────────────────────────────────

def _decode_regex_hook(obj: dict[str, Any]) -> Any:
    tagged = obj.get(REGEX_TAG)
    if isinstance(tagged, dict) and len(obj) == 1:
        flags = 0
        for letter in tagged.get("flags", ""):
            flags |= _REGEX_FLAGS.get(letter, 0)
        return re.compile(tagged["source"], flags)
    return obj


def _encode_regex_default(value: Any) -> Any:
    if isinstance(value, re.Pattern):
        flags = "".join(letter for letter, flag in _REGEX_FLAGS.items() if value.flags & flag)
        return {REGEX_TAG: {"source": value.pattern, "flags": flags}}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def loads_exam_specification(text: str) -> dict[str, Any]:
    """Parse exam specification JSON text, decoding tagged regexes."""
    return json.loads(text, object_hook=_decode_regex_hook)


def dumps_exam_specification(spec: dict[str, Any]) -> str:
    """Serialize an exam specification dict, tagging regexes."""
    return json.dumps(spec, default=_encode_regex_default, indent=2, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Exam Specification Files
# ─────────────────────────────────────────────────────────────────────────────

def load_exam_specification(path: Path) -> dict[str, Any]:
    """
    Load an exam specification dict from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Exam specification not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return loads_exam_specification(f.read())


def save_exam_specification(path: Path, spec: dict[str, Any]) -> None:
    """Save an exam specification dict to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_exam_specification(spec))


def load_exam(path: Path, *, strict: bool = True) -> Exam:
    """
    Load, validate and build an Exam from a specification file.

    Args:
        path: Path to exam specification JSON
        strict: Run full JSON Schema validation before building

    Raises:
        ValidationError: If the specification is invalid
        SpecificationError: If the specification cannot be built
    """
    spec = load_exam_specification(path)
    validate_exam_specification(spec, strict=strict)
    return Exam.create(spec)


# ─────────────────────────────────────────────────────────────────────────────
# Roster
# ─────────────────────────────────────────────────────────────────────────────

def load_csv_roster(path: Path) -> list[StudentInfo]:
    """
    Load a student roster from CSV.

    The file must have a header row with `uniqname` and `name` columns.
    Blank lines are skipped; other columns are ignored. A leading UTF-8
    byte order mark is accepted.

    Raises:
        FileNotFoundError: If the file doesn't exist
        RosterError: On missing columns, empty values or duplicate uniqnames
    """
    if not path.exists():
        raise FileNotFoundError(f"Roster not found: {path}")

    students: list[StudentInfo] = []
    seen: set[str] = set()
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in ("uniqname", "name") if c not in (reader.fieldnames or [])]
        if missing:
            raise RosterError(f"Roster {path} is missing columns: {missing}")

        for line_no, row in enumerate(reader, 2):
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            uniqname = (row.get("uniqname") or "").strip()
            name = (row.get("name") or "").strip()
            if not uniqname:
                raise RosterError(f"Student uniqname may not be empty ({path}, line {line_no})")
            if not name:
                raise RosterError(f"Student name may not be empty ({path}, line {line_no})")
            if uniqname in seen:
                raise RosterError(f"Duplicate uniqname {uniqname!r} ({path}, line {line_no})")
            seen.add(uniqname)
            students.append(StudentInfo(uniqname=uniqname, name=name))

    return students


# ─────────────────────────────────────────────────────────────────────────────
# Generation Artifacts
# ─────────────────────────────────────────────────────────────────────────────

def save_manifest_json(path: Path, manifest: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)


def load_manifest_json(path: Path, *, validate: bool = True) -> dict[str, Any]:
    """
    Load a manifest (or a submission in manifest shape) from JSON.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If validate=True and the data is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if validate:
        validate_manifest(data)
    return data


def save_stats_json(path: Path, stats: dict[str, Any]) -> None:
    """Write usage stats with sorted keys so reruns produce identical files."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2, sort_keys=True)


def save_student_ids_csv(path: Path, filenames: Iterable[tuple[str, str]]) -> None:
    """Write the `uniqname,filenameBase` lookup table."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["uniqname", "filenameBase"])
        for uniqname, filename_base in filenames:
            writer.writerow([uniqname, filename_base])
