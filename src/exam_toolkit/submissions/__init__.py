"""
Submissions Package

Checking submitted exams against generation-time manifests.
"""

from .trusted import (
    SubmissionMismatchError,
    fill_manifest,
    load_trusted_submission,
    load_trusted_submissions,
)

__all__ = [
    "SubmissionMismatchError",
    "fill_manifest",
    "load_trusted_submission",
    "load_trusted_submissions",
]
