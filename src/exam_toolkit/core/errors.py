"""
Module: core.errors

Purpose:
    Exception taxonomy for exam generation. Every condition listed here is
    a deterministic logic error in the specification or configuration, so
    none of them is retried; the run is aborted instead.

Key Classes:
    - GenerationError: Base class for all generation failures
    - ConfigurationError: Invalid generator configuration
    - SpecificationError: Malformed exam specification
    - SelectionRangeError: Chooser asked for more items than available
    - SkinConflictError: Section and question skins disagree on a key
    - DuplicateAssignmentError: Multiple instances where one is required
    - SpecificationDriftError: Same id, different specification object
    - PointTotalMismatchError: Students received different point totals

Used By:
    - core.models: Choosers, skins, components
    - builder: Randomizer, assignment, consistency, controller
"""

from __future__ import annotations


class GenerationError(Exception):
    """Error during exam generation."""
    pass


class ConfigurationError(GenerationError):
    """Generator configuration is invalid (detected before any student)."""
    pass


class SpecificationError(GenerationError):
    """Exam specification is malformed."""
    pass


class SelectionRangeError(GenerationError):
    """Selection requested more items than the pool holds (or a negative count)."""
    pass


class SkinConflictError(GenerationError):
    """Section and question skins define the same replacement with different values."""
    pass


class DuplicateAssignmentError(GenerationError):
    """More than one instance was produced where exactly one is allowed."""
    pass


class SpecificationDriftError(GenerationError):
    """Two assigned nodes share an id but originate from different specifications."""
    pass


class PointTotalMismatchError(GenerationError):
    """A student's exam is worth a different total than the first student's."""
    pass
