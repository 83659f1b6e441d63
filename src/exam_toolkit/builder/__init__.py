"""
Module: builder

Purpose:
    Randomized per-student exam assignment. Selects sections, questions and
    skins for every student on a roster, derives stable identifiers, checks
    the whole population for consistency, and exports manifests.

Key Functions:
    - create_student_uuid(): Student-specific identifiers

Key Classes:
    - GeneratorConfig: Configuration for generation
    - UuidStrategy: Identifier strategy enum
    - AssignmentBuilder: Builds one student's AssignedExam
    - ConsistencyChecker: Cross-student checks
    - ExamGenerator: Main entry point

Dependencies:
    - exam_toolkit.core: Models, randomization, serialization

Used By:
    - exam_toolkit.cli
"""

from .config import GeneratorConfig
from .uuid_strategy import UuidStrategy, create_student_uuid
from .assignment import AssignmentBuilder
from .consistency import ConsistencyChecker
from .controller import ExamGenerator, WriteResult

__all__ = [
    # Config
    "GeneratorConfig",
    "UuidStrategy",
    "create_student_uuid",
    # Assignment
    "AssignmentBuilder",
    "ConsistencyChecker",
    # Controller
    "ExamGenerator",
    "WriteResult",
]
