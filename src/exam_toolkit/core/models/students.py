"""
Module: students

Purpose:
    Provides StudentInfo - the roster entry every assigned exam belongs to.
    The uniqname is the unique key and the source of per-student
    determinism.

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.assigned
    - core.utils.serialization (roster loading)
    - builder (seeds, uuids)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class StudentInfo:
    """
    A single roster entry (immutable).

    Attributes:
        uniqname: Unique student key, e.g. "abc123"
        name: Display name

    Invariants:
        - uniqname and name are non-empty

    Example:
        >>> StudentInfo("abc123", "Alice Example").uniqname
        'abc123'
    """

    uniqname: str
    name: str

    def __post_init__(self) -> None:
        """Validate student on construction."""
        if not self.uniqname:
            raise ValueError("Student uniqname may not be empty")
        if not self.name:
            raise ValueError(f"Student name may not be empty (uniqname={self.uniqname!r})")

    def to_dict(self) -> dict[str, Any]:
        return {"uniqname": self.uniqname, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudentInfo:
        return cls(uniqname=data["uniqname"], name=data["name"])
