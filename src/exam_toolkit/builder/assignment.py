"""
Module: builder.assignment

Purpose:
    Build one student's AssignedExam from the exam specification.

Algorithm (strictly sequential per student):
    1. Choose sections with the student's section-choice randomizer
    2. For each chosen section: choose its skin, choose its questions,
       choose each question's skin and compose it with the section skin
    3. Derive uuids for the exam, each section and each question
    4. Assemble the immutable AssignedExam tree

    Every randomizer is seeded from the student's uniqname (or "common"
    under consistent randomization) plus the ids of the nodes involved, so
    a student's exam never depends on which students were built before.

Key Classes:
    - AssignmentBuilder: Per-student builder

Dependencies:
    - core.randomization: Seeded randomizers
    - core.models: Specification nodes, skins, assigned nodes
    - builder.uuid_strategy: Identifier derivation

Used By:
    - builder.controller: ExamGenerator
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple, TypeVar

from exam_toolkit.core.errors import (
    DuplicateAssignmentError,
    SelectionRangeError,
    SkinConflictError,
)
from exam_toolkit.core.models import (
    AssignedExam,
    AssignedQuestion,
    AssignedSection,
    Chooser,
    Exam,
    Question,
    Section,
    Skin,
    StudentInfo,
    create_composite_skin,
    is_chooser,
)
from exam_toolkit.core.models.components import SkinNode
from exam_toolkit.core.randomization import (
    CHOOSE_ALL,
    Randomizer,
    question_choice_randomizer,
    question_skin_randomizer,
    section_choice_randomizer,
    section_skin_randomizer,
)

from .config import GeneratorConfig
from .uuid_strategy import create_student_uuid

logger = logging.getLogger(__name__)

T = TypeVar("T")

COMMON_SEED = "common"


@dataclass(frozen=True)
class AssignmentBuilder:
    """
    Builds AssignedExams for one exam specification.

    Holds no per-student state; every call to build() starts from fresh
    randomizers.

    Attributes:
        exam: Exam specification
        config: Generator configuration

    Example:
        >>> builder = AssignmentBuilder(exam, GeneratorConfig())
        >>> ae = builder.build(StudentInfo("abc123", "Alice"))
        >>> ae.uuid
        'abc123-final'
    """

    exam: Exam
    config: GeneratorConfig

    def build(self, student: StudentInfo) -> AssignedExam:
        """
        Build the complete assignment tree for one student.

        Raises:
            SelectionRangeError: A chooser over-draws its pool
            SkinConflictError: Section/question skins conflict
            DuplicateAssignmentError: Multiple instances without allow_duplicates
        """
        seed = self.seed_for(student)
        randomizer = self._randomizer(section_choice_randomizer, seed, self.exam)

        chosen_sections: List[Section] = []
        for chooser in self.exam.sections:
            chosen_sections.extend(
                self._run_chooser(chooser, student, randomizer, f"exam {self.exam.exam_id!r} sections")
            )

        assigned_sections: List[AssignedSection] = []
        for section_index, section in enumerate(chosen_sections):
            assigned_sections.extend(self._build_section(section, student, section_index, seed))

        ae = AssignedExam(
            uuid=create_student_uuid(self.config, student, self.exam.exam_id),
            exam=self.exam,
            student=student,
            assigned_sections=tuple(assigned_sections),
            allow_duplicates=self.config.allow_duplicates,
        )
        logger.debug(
            f"Assigned {len(ae.assigned_sections)} sections, "
            f"{len(ae.assigned_questions)} questions ({ae.points_possible} points) "
            f"to {student.uniqname}"
        )
        return ae

    def seed_for(self, student: StudentInfo) -> str:
        """Seed string used for every randomizer in this student's build."""
        return COMMON_SEED if self.config.consistent_randomization else student.uniqname

    # ─────────────────────────────────────────────────────────────────────────
    # Sections and Questions
    # ─────────────────────────────────────────────────────────────────────────

    def _build_section(
        self,
        section: Section,
        student: StudentInfo,
        section_index: int,
        seed: str,
    ) -> List[AssignedSection]:
        question_rand = self._randomizer(question_choice_randomizer, seed, self.exam, section)
        skin_rand = self._randomizer(section_skin_randomizer, seed, self.exam, section)
        where = f"section {section.section_id!r}"

        section_skins = self._resolve_skins(section.skin, student, skin_rand, where)

        result = []
        for section_skin in section_skins:
            questions: List[Question] = []
            for chooser in section.questions:
                questions.extend(
                    self._run_chooser(chooser, student, question_rand, f"{where} questions")
                )

            assigned_questions: List[AssignedQuestion] = []
            for part_index, question in enumerate(questions):
                assigned_questions.extend(
                    self._build_question(question, student, section_index, part_index, section_skin, seed)
                )

            result.append(AssignedSection(
                uuid=create_student_uuid(
                    self.config, student, f"{self.exam.exam_id}-s-{section.section_id}"
                ),
                section=section,
                section_index=section_index,
                skin=section_skin,
                assigned_questions=tuple(assigned_questions),
            ))
        return result

    def _build_question(
        self,
        question: Question,
        student: StudentInfo,
        section_index: int,
        part_index: int,
        section_skin: Skin,
        seed: str,
    ) -> List[AssignedQuestion]:
        skin_rand = self._randomizer(question_skin_randomizer, seed, self.exam, question)
        where = f"question {question.question_id!r}"

        question_skins = self._resolve_skins(question.skin, student, skin_rand, where)

        result = []
        for question_skin in question_skins:
            try:
                skin = create_composite_skin(section_skin, question_skin)
            except SkinConflictError as e:
                raise SkinConflictError(f"{where} for student {student.uniqname!r}: {e}") from e

            result.append(AssignedQuestion(
                uuid=create_student_uuid(
                    self.config, student, f"{self.exam.exam_id}-q-{question.question_id}"
                ),
                exam=self.exam,
                student=student,
                question=question,
                skin=skin,
                section_index=section_index,
                part_index=part_index,
            ))
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _randomizer(self, factory, *args) -> Randomizer:
        if self.config.choose_all:
            return CHOOSE_ALL
        return factory(*args)

    def _run_chooser(
        self,
        chooser: Chooser[T],
        student: StudentInfo,
        randomizer: Randomizer,
        where: str,
    ) -> Tuple[T, ...]:
        try:
            return chooser.choose(self.exam, student, randomizer)
        except SelectionRangeError as e:
            raise SelectionRangeError(f"{where} for student {student.uniqname!r}: {e}") from e

    def _resolve_skins(
        self,
        node: SkinNode,
        student: StudentInfo,
        randomizer: Randomizer,
        where: str,
    ) -> Tuple[Skin, ...]:
        skins = (
            self._run_chooser(node, student, randomizer, f"{where} skin")
            if is_chooser(node)
            else (node,)
        )
        if not self.config.allow_duplicates and len(skins) != 1:
            raise DuplicateAssignmentError(
                f"{where} produced {len(skins)} skins for student {student.uniqname!r}; "
                "multiple skins per slot are only allowed when the exam allows duplicates"
            )
        return skins
