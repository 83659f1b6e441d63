"""
Module: submissions.trusted

Purpose:
    Turn a student's submitted answers into a trusted submission by
    checking them against the manifest recorded at generation time. The
    manifest, not the submission, decides what was assigned; only the
    responses are taken from the submission.

Key Functions:
    - fill_manifest(): Copy responses from a submission into its manifest
    - load_trusted_submission(): Locate the manifest for a submission file
    - load_trusted_submissions(): Load a whole directory of submissions

Dependencies:
    - core.utils.serialization: Manifest JSON loading

Used By:
    - Grading collaborators
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List

from exam_toolkit.core.schemas.validator import ValidationError
from exam_toolkit.core.utils.serialization import load_manifest_json

logger = logging.getLogger(__name__)


class SubmissionMismatchError(ValueError):
    """Raised when a submission doesn't correspond to its manifest."""
    pass


def fill_manifest(manifest: Dict[str, Any], submission: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a trusted submission from a manifest and a submission.

    Args:
        manifest: Manifest written at generation time
        submission: Submitted exam in manifest shape

    Returns:
        Deep copy of the manifest with each question's `response` replaced
        by the submitted response (blank if the question was not answered)
        and `trusted` set to True

    Raises:
        SubmissionMismatchError: If exam uuid or student differ, or the
            submission contains question uuids the manifest doesn't
    """
    if submission.get("uuid") != manifest["uuid"]:
        raise SubmissionMismatchError(
            f"Submission uuid {submission.get('uuid')!r} does not match manifest uuid {manifest['uuid']!r}"
        )
    submitted_uniqname = submission.get("student", {}).get("uniqname")
    if submitted_uniqname != manifest["student"]["uniqname"]:
        raise SubmissionMismatchError(
            f"Submission for {submitted_uniqname!r} does not match manifest for "
            f"{manifest['student']['uniqname']!r}"
        )

    responses: Dict[str, Any] = {}
    for section in submission.get("sections", []):
        for question in section.get("questions", []):
            responses[question["uuid"]] = question.get("response", "")

    trusted = copy.deepcopy(manifest)
    expected = set()
    for section in trusted["sections"]:
        for question in section["questions"]:
            expected.add(question["uuid"])
            question["response"] = responses.get(question["uuid"], "")

    unknown = sorted(set(responses) - expected)
    if unknown:
        raise SubmissionMismatchError(
            f"Submission for {submitted_uniqname!r} contains questions not in its manifest: {unknown}"
        )

    trusted["trusted"] = True
    return trusted


def load_trusted_submission(manifest_dir: Path, submission_path: Path) -> Dict[str, Any]:
    """
    Load a submission file and fill its manifest.

    The manifest is located as `<manifest_dir>/<uniqname>-<uuid>.json`.

    Raises:
        FileNotFoundError: If either file is missing
        ValidationError: If either file is malformed
        SubmissionMismatchError: If they don't correspond
    """
    submission = load_manifest_json(submission_path)
    filename = f"{submission['student']['uniqname']}-{submission['uuid']}.json"
    manifest = load_manifest_json(Path(manifest_dir) / filename)
    return fill_manifest(manifest, submission)


def load_trusted_submissions(manifest_dir: Path, submissions_dir: Path) -> List[Dict[str, Any]]:
    """
    Load every submission in a directory.

    Files that can't be read or matched are logged and skipped so one bad
    upload doesn't block grading the rest.

    Returns:
        Trusted submissions, in filename order
    """
    trusted: List[Dict[str, Any]] = []
    for path in sorted(Path(submissions_dir).iterdir()):
        if not path.is_file():
            continue
        try:
            trusted.append(load_trusted_submission(manifest_dir, path))
        except (OSError, ValueError, KeyError, ValidationError) as e:
            logger.warning(f"Unable to open submission file {path.name}: {e}")
    logger.info(f"Loaded {len(trusted)} trusted submissions from {submissions_dir}")
    return trusted
