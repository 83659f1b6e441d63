"""
Module: assigned

Purpose:
    The per-student assignment tree: AssignedExam owns AssignedSections,
    which own AssignedQuestions. Each node points back (never owns) to the
    specification node it was built from. The tree is immutable; attaching
    a submission produces a new AssignedQuestion.

Key Functions:
    - AssignedExam.points_possible: Calculated from assigned questions
    - AssignedExam.create_manifest(): Manifest dict for serialization

Key Classes:
    - AssignedQuestion
    - AssignedSection
    - AssignedExam

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .components, .skins, .students

Used By:
    - builder.assignment: Construction
    - builder.consistency: Drift and point checks
    - builder.controller: Manifest export
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, Dict, Tuple

from ..errors import DuplicateAssignmentError
from .components import Exam, Question, Section
from .skins import CompositeSkin, Skin
from .students import StudentInfo

BLANK_SUBMISSION = ""


@dataclass(frozen=True, eq=False)
class AssignedQuestion:
    """
    One student's instance of a question.

    Attributes:
        uuid: Student-specific identifier
        exam: Exam specification node
        student: Student the question was assigned to
        question: Question specification node
        skin: Composite of the section and question skins
        section_index: 0-based index of the enclosing section
        part_index: 0-based index within the section
        submission: Submitted response; blank until grading
    """

    uuid: str
    exam: Exam
    student: StudentInfo
    question: Question
    skin: CompositeSkin
    section_index: int
    part_index: int
    submission: Any = BLANK_SUBMISSION

    @property
    def points_possible(self) -> float:
        return self.question.points_possible

    @property
    def display_index(self) -> str:
        return f"{self.section_index + 1}.{self.part_index + 1}"

    def with_submission(self, submission: Any) -> AssignedQuestion:
        """Return a copy carrying the given submission."""
        return replace(self, submission=submission)

    def create_manifest(self) -> Dict[str, Any]:
        return {
            "question_id": self.question.question_id,
            "uuid": self.uuid,
            "display_index": self.display_index,
            "kind": self.question.kind,
            "skin_id": self.skin.skin_id,
            "pointsPossible": self.points_possible,
            "response": self.submission,
        }


@dataclass(frozen=True, eq=False)
class AssignedSection:
    """
    One student's instance of a section.

    Attributes:
        uuid: Student-specific identifier
        section: Section specification node
        section_index: 0-based position in the exam
        skin: Leaf skin selected for this section
        assigned_questions: Ordered questions owned by this section
    """

    uuid: str
    section: Section
    section_index: int
    skin: Skin
    assigned_questions: Tuple[AssignedQuestion, ...]

    @cached_property
    def points_possible(self) -> float:
        return sum(q.points_possible for q in self.assigned_questions)

    @property
    def display_index(self) -> str:
        return f"{self.section_index + 1}"

    def create_manifest(self) -> Dict[str, Any]:
        return {
            "section_id": self.section.section_id,
            "uuid": self.uuid,
            "display_index": self.display_index,
            "skin_id": self.skin.skin_id,
            "questions": [q.create_manifest() for q in self.assigned_questions],
        }


@dataclass(frozen=True, eq=False)
class AssignedExam:
    """
    One student's complete exam; root of the assignment tree.

    Attributes:
        uuid: Student-specific identifier
        exam: Exam specification node
        student: Student the exam was assigned to
        assigned_sections: Ordered sections owned by this exam
        allow_duplicates: Whether a section/question id may appear twice

    Invariants:
        - points_possible is always calculated, never stored
        - without allow_duplicates, section ids and question ids are
          unique within the exam
    """

    uuid: str
    exam: Exam
    student: StudentInfo
    assigned_sections: Tuple[AssignedSection, ...]
    allow_duplicates: bool = False

    def __post_init__(self) -> None:
        if self.allow_duplicates:
            return
        seen_sections = set()
        seen_questions = set()
        for s in self.assigned_sections:
            if s.section.section_id in seen_sections:
                raise DuplicateAssignmentError(
                    f"Section {s.section.section_id!r} was assigned more than once to "
                    f"{self.student.uniqname!r}, but the exam does not allow duplicates"
                )
            seen_sections.add(s.section.section_id)
            for q in s.assigned_questions:
                if q.question.question_id in seen_questions:
                    raise DuplicateAssignmentError(
                        f"Question {q.question.question_id!r} was assigned more than once to "
                        f"{self.student.uniqname!r}, but the exam does not allow duplicates"
                    )
                seen_questions.add(q.question.question_id)

    @cached_property
    def points_possible(self) -> float:
        return sum(s.points_possible for s in self.assigned_sections)

    @property
    def assigned_questions(self) -> Tuple[AssignedQuestion, ...]:
        return tuple(q for s in self.assigned_sections for q in s.assigned_questions)

    @property
    def filename_base(self) -> str:
        """Base name for this exam's output files: "<uniqname>-<uuid>"."""
        return f"{self.student.uniqname}-{self.uuid}"

    def create_manifest(self) -> Dict[str, Any]:
        """
        Create the manifest recording exactly what was assigned.

        Returns:
            Dict with exam_id, uuid, student, pointsPossible and sections
        """
        return {
            "exam_id": self.exam.exam_id,
            "uuid": self.uuid,
            "student": self.student.to_dict(),
            "pointsPossible": self.points_possible,
            "sections": [s.create_manifest() for s in self.assigned_sections],
        }

    def __repr__(self) -> str:
        return (
            f"AssignedExam({self.student.uniqname!r}, "
            f"sections={len(self.assigned_sections)}, points={self.points_possible})"
        )
