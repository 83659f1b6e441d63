"""
Schemas Package

JSON Schema files and validators for exam specifications and manifests.
"""

from .validator import (
    validate_exam_specification,
    validate_manifest,
    ValidationError,
)

__all__ = [
    "validate_exam_specification",
    "validate_manifest",
    "ValidationError",
]
