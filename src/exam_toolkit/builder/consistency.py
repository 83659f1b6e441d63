"""
Module: builder.consistency

Purpose:
    Cross-student checks for one generation run:
    - every section/question id traces back to a single specification
      object (no spec drift)
    - every student's exam is worth the same number of points

    The tables live on a checker instance scoped to one run; separate
    generators never share them.

Key Classes:
    - UsageEntry: Representative node and usage count for one id
    - ConsistencyChecker: Running tables and checks

Dependencies:
    - core.models.assigned: AssignedExam

Used By:
    - builder.controller: ExamGenerator
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from exam_toolkit.core.errors import PointTotalMismatchError, SpecificationDriftError
from exam_toolkit.core.models import AssignedExam, Question, Section

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class UsageEntry(Generic[T]):
    """First node seen for an id, and how many times the id was assigned."""

    representative: T
    n: int = 1


@dataclass
class ConsistencyChecker:
    """
    Run-scoped drift tables and point-total reference.

    Attributes:
        sections: section_id -> UsageEntry
        questions: question_id -> UsageEntry

    Invariants:
        - entries are added strictly in roster order
        - each id maps to exactly one spec object for the whole run
    """

    sections: Dict[str, UsageEntry[Section]] = field(default_factory=dict)
    questions: Dict[str, UsageEntry[Question]] = field(default_factory=dict)
    _reference: Optional[AssignedExam] = field(default=None, init=False, repr=False)

    def check(self, ae: AssignedExam) -> None:
        """Run all checks for a newly assigned exam."""
        self.check_exam(ae)
        self.check_points(ae)

    def check_exam(self, ae: AssignedExam) -> None:
        """
        Record every section/question of an exam and check for spec drift.

        Raises:
            SpecificationDriftError: If an id was seen before with a
                different spec object
        """
        for assigned_section in ae.assigned_sections:
            section = assigned_section.section
            self._record(self.sections, section.section_id, section, "section", ae)

        for assigned_question in ae.assigned_questions:
            question = assigned_question.question
            self._record(self.questions, question.question_id, question, "question", ae)

    def check_points(self, ae: AssignedExam) -> None:
        """
        Compare an exam's total against the first checked exam.

        Raises:
            PointTotalMismatchError: If the totals differ
        """
        if self._reference is None:
            self._reference = ae
            return
        reference = self._reference
        if ae.points_possible != reference.points_possible:
            raise PointTotalMismatchError(
                "Inconsistent total point values. "
                f"{reference.student.uniqname}={reference.points_possible}, "
                f"{ae.student.uniqname}={ae.points_possible}."
            )

    def stats(self) -> Dict[str, Any]:
        """
        Usage counts for auditing which variants were assigned.

        Returns:
            {"sections": {id: {"n": k}}, "questions": {id: {"n": k}}}
        """
        return {
            "sections": {sid: {"n": e.n} for sid, e in self.sections.items()},
            "questions": {qid: {"n": e.n} for qid, e in self.questions.items()},
        }

    def _record(
        self,
        table: Dict[str, UsageEntry[Any]],
        node_id: str,
        node: Any,
        kind: str,
        ae: AssignedExam,
    ) -> None:
        entry = table.get(node_id)
        if entry is None:
            table[node_id] = UsageEntry(representative=node)
            return
        entry.n += 1
        if node.spec is not entry.representative.spec:
            raise SpecificationDriftError(
                f"Multiple {kind}s from different specifications with the ID "
                f"{node_id!r} were detected (student {ae.student.uniqname!r})."
            )
