"""
Core Models Package

Specification nodes, selection policies, skins and the per-student
assignment tree.

All nodes are frozen dataclasses. Specification nodes are loaded once and
treated as read-only for the whole run; assigned nodes are built fresh per
student and never mutated.
"""

from .students import StudentInfo
from .skins import Skin, CompositeSkin, DEFAULT_SKIN, create_composite_skin
from .choosers import Chooser, Fixed, ChooseAll, ChooseN, WeightedChoice, is_chooser
from .components import Exam, Section, Question, customize, validate_id
from .assigned import AssignedExam, AssignedSection, AssignedQuestion, BLANK_SUBMISSION

__all__ = [
    "StudentInfo",
    "Skin",
    "CompositeSkin",
    "DEFAULT_SKIN",
    "create_composite_skin",
    "Chooser",
    "Fixed",
    "ChooseAll",
    "ChooseN",
    "WeightedChoice",
    "is_chooser",
    "Exam",
    "Section",
    "Question",
    "customize",
    "validate_id",
    "AssignedExam",
    "AssignedSection",
    "AssignedQuestion",
    "BLANK_SUBMISSION",
]
