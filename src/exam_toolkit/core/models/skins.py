"""
Module: skins

Purpose:
    Provides Skin (a named set of replacements applied to section and
    question content) and the compositor that merges a section skin with
    a question skin into the CompositeSkin an assigned question carries.

Key Functions:
    - create_composite_skin(section_skin, question_skin): Key-wise merge
    - Skin.from_dict() / Skin.to_dict(): Serialization

Key Classes:
    - Skin: Leaf skin
    - CompositeSkin: Result of merging two leaf skins

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.components: Section/Question skins
    - builder.assignment: Composition per assigned question

Conflict Policy:
    Composition fails with SkinConflictError when both sides define the
    same key with different values. The same key with an equal value is
    accepted. Neither side silently wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import SkinConflictError


@dataclass(frozen=True)
class Skin:
    """
    A named set of textual/value substitutions (immutable).

    Attributes:
        skin_id: Identifier, unique within its chooser pool
        replacements: Replacement key -> value

    Example:
        >>> Skin("vars_xy", {"x": "foo", "y": "bar"}).replacements["x"]
        'foo'
    """

    skin_id: str
    replacements: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Skin:
        return cls(skin_id=data["skin_id"], replacements=dict(data.get("replacements", {})))

    def to_dict(self) -> Dict[str, Any]:
        return {"skin_id": self.skin_id, "replacements": dict(self.replacements)}


DEFAULT_SKIN = Skin(skin_id="default", replacements={})


@dataclass(frozen=True)
class CompositeSkin(Skin):
    """
    Merged section + question skin.

    Attributes:
        section_skin: Skin selected for the enclosing section
        question_skin: Skin selected for the question
    """

    section_skin: Optional[Skin] = None
    question_skin: Optional[Skin] = None


def create_composite_skin(section_skin: Skin, question_skin: Skin) -> CompositeSkin:
    """
    Merge a section skin and a question skin.

    Args:
        section_skin: Leaf skin chosen for the section
        question_skin: Leaf skin chosen for the question

    Returns:
        CompositeSkin with id "<section>-<question>" and the union of both
        replacement maps

    Raises:
        SkinConflictError: If a key is defined on both sides with different values
        TypeError: If either argument is not a resolved Skin

    Example:
        >>> s = create_composite_skin(Skin("s", {"a": 1}), Skin("q", {"b": 2}))
        >>> s.replacements
        {'a': 1, 'b': 2}
    """
    if not isinstance(section_skin, Skin) or not isinstance(question_skin, Skin):
        raise TypeError("Composite skins can only be created from resolved leaf skins")

    shared = section_skin.replacements.keys() & question_skin.replacements.keys()
    conflicts = sorted(
        key for key in shared
        if section_skin.replacements[key] != question_skin.replacements[key]
    )
    if conflicts:
        raise SkinConflictError(
            f"Section skin {section_skin.skin_id!r} and question skin "
            f"{question_skin.skin_id!r} define conflicting values for {conflicts}"
        )

    merged = dict(section_skin.replacements)
    merged.update(question_skin.replacements)
    return CompositeSkin(
        skin_id=f"{section_skin.skin_id}-{question_skin.skin_id}",
        replacements=merged,
        section_skin=section_skin,
        question_skin=question_skin,
    )
