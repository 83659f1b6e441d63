"""
Module: components

Purpose:
    Specification nodes: Exam, Section and Question. Each is built from the
    author-written specification dict and keeps a back-reference to it in
    `spec`. Two nodes with the same id are only interchangeable when they
    reference the identical spec object; anything else is spec drift.

Key Functions:
    - Exam.create(spec) / Section.create(spec) / Question.create(spec)
    - customize(spec, overrides): Copy a spec with some fields replaced
    - validate_id(): Identifier format check

Key Classes:
    - Exam: Root specification node
    - Section: Ordered question choosers plus a skin
    - Question: Points, opaque response spec, skin

Dependencies:
    - re (std)
    - core.models.choosers: Section/question/skin pools
    - core.models.skins: Skin, DEFAULT_SKIN

Used By:
    - core.utils.serialization.load_exam
    - builder.assignment
    - builder.consistency
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, TypeVar, Union

from ..errors import SelectionRangeError, SpecificationError
from .choosers import ChooseAll, ChooseN, Chooser, Fixed, WeightedChoice, is_chooser
from .skins import DEFAULT_SKIN, Skin

T = TypeVar("T")

ID_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_\-]*$")

SkinNode = Union[Skin, Chooser[Skin]]


def validate_id(value: Any, what: str) -> str:
    """
    Check an exam/section/question/skin identifier.

    Identifiers start with a letter and contain only letters, digits,
    underscores and hyphens.

    Raises:
        SpecificationError: If the identifier is invalid
    """
    if not isinstance(value, str) or not ID_PATTERN.match(value):
        raise SpecificationError(f"Invalid {what} id: {value!r}")
    return value


def customize(spec: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of a specification dict with some fields replaced.

    Example:
        >>> customize({"question_id": "q", "points": 1}, {"question_id": "q2"})
        {'question_id': 'q2', 'points': 1}
    """
    return {**spec, **overrides}


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise SpecificationError(f"{where} must be an object, got {type(data).__name__}")
    if key not in data:
        raise SpecificationError(f"{where} is missing required field {key!r}")
    return data[key]


def _check_unique_ids(items: Sequence[T], get_id: Callable[[T], str], where: str) -> None:
    seen = set()
    for item in items:
        item_id = get_id(item)
        if item_id in seen:
            raise SpecificationError(f"Duplicate id {item_id!r} in {where}")
        seen.add(item_id)


def _parse_chooser(
    data: Dict[str, Any],
    parse_item: Callable[[Any], T],
    get_id: Callable[[T], str],
    where: str,
) -> Chooser[T]:
    """Build a chooser from its {"component_kind": "chooser", ...} form."""
    choices = tuple(parse_item(c) for c in _require(data, "choices", where))
    _check_unique_ids(choices, get_id, where)

    strategy = data.get("strategy", "random")
    try:
        if strategy == "all":
            return ChooseAll(choices)
        if strategy == "random":
            return ChooseN(data.get("n", 1), choices)
        if strategy == "weighted":
            weights = tuple(_require(data, "weights", where))
            return WeightedChoice(data.get("n", 1), choices, weights)
    except SelectionRangeError as e:
        raise SelectionRangeError(f"{where}: {e}") from e
    except SpecificationError as e:
        raise SpecificationError(f"{where}: {e}") from e
    except ValueError as e:
        raise SpecificationError(f"{where}: {e}") from e
    raise SpecificationError(f"Unknown chooser strategy {strategy!r} in {where}")


def _parse_entry(
    entry: Any,
    parse_item: Callable[[Any], T],
    get_id: Callable[[T], str],
    where: str,
) -> Chooser[T]:
    if is_chooser(entry):
        return entry
    if isinstance(entry, dict) and entry.get("component_kind") == "chooser":
        return _parse_chooser(entry, parse_item, get_id, where)
    return Fixed(parse_item(entry))


def _parse_skin(data: Any, where: str) -> SkinNode:
    if data is None:
        return DEFAULT_SKIN
    if isinstance(data, Skin) or is_chooser(data):
        return data
    if isinstance(data, dict) and data.get("component_kind") == "chooser":
        return _parse_chooser(data, lambda s: _parse_skin_leaf(s, where), lambda s: s.skin_id, f"{where} skin chooser")
    return _parse_skin_leaf(data, where)


def _parse_skin_leaf(data: Any, where: str) -> Skin:
    if isinstance(data, Skin):
        return data
    validate_id(_require(data, "skin_id", f"{where} skin"), "skin")
    replacements = data.get("replacements", {})
    if not isinstance(replacements, dict):
        raise SpecificationError(f"Skin {data['skin_id']!r} replacements must be an object")
    return Skin.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Specification Nodes
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class Question:
    """
    A question specification node (immutable).

    Attributes:
        question_id: Identifier, e.g. "recursion_base_case"
        points_possible: Points the question is worth
        mk_description: Markdown description (rendered externally)
        response: Opaque response specification
        skin: Leaf skin or skin chooser
        tags: Author tags
        media_dir: Optional directory of media copied with the exam
        spec: The specification object this node was built from. When
            constructed directly, the node is its own spec.
    """

    question_id: str
    points_possible: float
    mk_description: str = ""
    response: Any = None
    skin: SkinNode = DEFAULT_SKIN
    tags: Tuple[str, ...] = ()
    media_dir: Optional[str] = None
    spec: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_id(self.question_id, "question")
        points = self.points_possible
        if isinstance(points, bool) or not isinstance(points, (int, float)) or points < 0:
            raise SpecificationError(
                f"Question {self.question_id!r} has invalid points: {points!r}"
            )
        if self.spec is None:
            object.__setattr__(self, "spec", self)

    @property
    def kind(self) -> Optional[str]:
        """Response kind (e.g. "multiple_choice") if the response declares one."""
        if isinstance(self.response, dict):
            return self.response.get("kind")
        return getattr(self.response, "kind", None)

    @classmethod
    def create(cls, spec: Union[Dict[str, Any], Question]) -> Question:
        if isinstance(spec, Question):
            return spec
        where = f"question {spec.get('question_id', '?')!r}" if isinstance(spec, dict) else "question"
        return cls(
            question_id=_require(spec, "question_id", where),
            points_possible=_require(spec, "points", where),
            mk_description=spec.get("mk_description", ""),
            response=spec.get("response"),
            skin=_parse_skin(spec.get("skin"), where),
            tags=tuple(spec.get("tags", ())),
            media_dir=spec.get("media_dir"),
            spec=spec,
        )

    def __repr__(self) -> str:
        return f"Question({self.question_id!r}, points={self.points_possible})"


@dataclass(frozen=True, eq=False)
class Section:
    """
    A section specification node (immutable).

    Attributes:
        section_id: Identifier
        title: Section title
        questions: Ordered question choosers
        mk_description: Markdown description
        mk_reference: Markdown reference material
        skin: Leaf skin or skin chooser
        media_dir: Optional directory of media copied with the exam
        reference_width: Optional reference panel width (percent)
        spec: Originating specification object
    """

    section_id: str
    title: str
    questions: Tuple[Chooser[Question], ...]
    mk_description: str = ""
    mk_reference: Optional[str] = None
    skin: SkinNode = DEFAULT_SKIN
    media_dir: Optional[str] = None
    reference_width: Optional[int] = None
    spec: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_id(self.section_id, "section")
        if self.spec is None:
            object.__setattr__(self, "spec", self)

    @classmethod
    def create(cls, spec: Union[Dict[str, Any], Section]) -> Section:
        if isinstance(spec, Section):
            return spec
        where = f"section {spec.get('section_id', '?')!r}" if isinstance(spec, dict) else "section"
        questions = tuple(
            _parse_entry(q, Question.create, lambda q: q.question_id, f"{where} questions")
            for q in _require(spec, "questions", where)
        )
        return cls(
            section_id=_require(spec, "section_id", where),
            title=spec.get("title", ""),
            questions=questions,
            mk_description=spec.get("mk_description", ""),
            mk_reference=spec.get("mk_reference"),
            skin=_parse_skin(spec.get("skin"), where),
            media_dir=spec.get("media_dir"),
            reference_width=spec.get("reference_width"),
            spec=spec,
        )

    def __repr__(self) -> str:
        return f"Section({self.section_id!r}, choosers={len(self.questions)})"


@dataclass(frozen=True, eq=False)
class Exam:
    """
    The root exam specification node (immutable).

    Attributes:
        exam_id: Identifier, used in seeds, uuids and output paths
        title: Exam title
        sections: Ordered section choosers
        mk_instructions: Markdown instructions
        mk_questions_message: Markdown shown above the questions
        mk_bottom_message: Markdown shown at the end
        media_dir: Optional directory of exam-level media
        spec: Originating specification object

    Example:
        >>> exam = Exam.create({
        ...     "exam_id": "final",
        ...     "title": "Final",
        ...     "sections": [{"section_id": "s1", "questions": [
        ...         {"question_id": "q1", "points": 3}]}],
        ... })
        >>> exam.sections[0].choices[0].section_id
        's1'
    """

    exam_id: str
    title: str
    sections: Tuple[Chooser[Section], ...]
    mk_instructions: str = ""
    mk_questions_message: str = ""
    mk_bottom_message: str = ""
    media_dir: Optional[str] = None
    spec: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_id(self.exam_id, "exam")
        if self.spec is None:
            object.__setattr__(self, "spec", self)

    @classmethod
    def create(cls, spec: Union[Dict[str, Any], Exam]) -> Exam:
        if isinstance(spec, Exam):
            return spec
        where = f"exam {spec.get('exam_id', '?')!r}" if isinstance(spec, dict) else "exam"
        sections = tuple(
            _parse_entry(s, Section.create, lambda s: s.section_id, f"{where} sections")
            for s in _require(spec, "sections", where)
        )
        return cls(
            exam_id=_require(spec, "exam_id", where),
            title=spec.get("title", ""),
            sections=sections,
            mk_instructions=spec.get("mk_instructions", ""),
            mk_questions_message=spec.get("mk_questions_message", ""),
            mk_bottom_message=spec.get("mk_bottom_message", ""),
            media_dir=spec.get("media_dir"),
            spec=spec,
        )

    def __repr__(self) -> str:
        return f"Exam({self.exam_id!r}, choosers={len(self.sections)})"
