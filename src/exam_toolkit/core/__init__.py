"""
Exam Toolkit Core Package

Shared data models, randomization and serialization utilities used by the
builder and by submission checking.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; attaching a submission creates a new node

2. **Calculated Points (Never Stored)**
   - `points_possible` on assigned sections/exams is always summed from
     the assigned questions

3. **Identity-Based Provenance**
   - Every node keeps `spec`, the object it was built from; ids are only
     interchangeable when their specs are the same object
"""

from .errors import (
    GenerationError,
    ConfigurationError,
    SpecificationError,
    SelectionRangeError,
    SkinConflictError,
    DuplicateAssignmentError,
    SpecificationDriftError,
    PointTotalMismatchError,
)
from .models import (
    StudentInfo,
    Skin,
    CompositeSkin,
    Exam,
    Section,
    Question,
    AssignedExam,
    AssignedSection,
    AssignedQuestion,
)
from .randomization import Randomizer, CHOOSE_ALL

__all__ = [
    "GenerationError",
    "ConfigurationError",
    "SpecificationError",
    "SelectionRangeError",
    "SkinConflictError",
    "DuplicateAssignmentError",
    "SpecificationDriftError",
    "PointTotalMismatchError",
    "StudentInfo",
    "Skin",
    "CompositeSkin",
    "Exam",
    "Section",
    "Question",
    "AssignedExam",
    "AssignedSection",
    "AssignedQuestion",
    "Randomizer",
    "CHOOSE_ALL",
]
