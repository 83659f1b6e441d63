"""
Module: builder.controller

Purpose:
    Orchestrate exam generation for a roster.
    Configure → Assign (per student) → Check → Export

Key Classes:
    - ExamGenerator: Assigns exams and exports manifests/stats/ids
    - WriteResult: Paths written by ExamGenerator.write_all()

Dependencies:
    - builder.assignment: Per-student assignment
    - builder.consistency: Cross-student checks
    - core.utils.serialization: Artifact writers

Used By:
    - exam_toolkit.cli: Command-line entry point
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from exam_toolkit.core.errors import GenerationError
from exam_toolkit.core.models import AssignedExam, Exam, StudentInfo
from exam_toolkit.core.utils.serialization import (
    save_manifest_json,
    save_stats_json,
    save_student_ids_csv,
)

from .assignment import AssignmentBuilder
from .config import GeneratorConfig
from .consistency import ConsistencyChecker

logger = logging.getLogger(__name__)

# (assigned exam, frontend js path) -> rendered document
Renderer = Callable[[AssignedExam, str], str]


@dataclass(frozen=True)
class WriteResult:
    """
    Files written by ExamGenerator.write_all() (immutable).

    Attributes:
        manifest_paths: One manifest per student, sorted by uniqname
        document_paths: Rendered documents (empty without a renderer)
        stats_path: Usage stats JSON
        student_ids_path: uniqname -> filename base CSV
    """
    manifest_paths: Tuple[Path, ...]
    document_paths: Tuple[Path, ...]
    stats_path: Path
    student_ids_path: Path


@dataclass
class ExamGenerator:
    """
    Assigns randomized exams to students and exports the results.

    Any failure while assigning marks the generator as failed: the run is
    no longer trustworthy, so further assignment and export are refused.

    Attributes:
        exam: Exam specification
        config: Generator configuration (validated on construction)
        assigned_exams: Exams in assignment order
        assigned_exams_by_uniqname: Lookup by student

    Example:
        >>> gen = ExamGenerator(exam, GeneratorConfig(uuid_strategy="plain"))
        >>> gen.assign_exams(load_csv_roster(Path("roster.csv")))
        >>> gen.write_all(Path("out"), Path("data"))
    """

    exam: Exam
    config: GeneratorConfig = field(default_factory=GeneratorConfig)

    assigned_exams: List[AssignedExam] = field(init=False, default_factory=list)
    assigned_exams_by_uniqname: Dict[str, AssignedExam] = field(init=False, default_factory=dict)

    _builder: AssignmentBuilder = field(init=False, repr=False)
    _checker: ConsistencyChecker = field(init=False, repr=False)
    _failed: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.config, GeneratorConfig):
            raise TypeError(f"config must be a GeneratorConfig, got {type(self.config).__name__}")
        self._builder = AssignmentBuilder(self.exam, self.config)
        self._checker = ConsistencyChecker()

    @property
    def failed(self) -> bool:
        return self._failed

    # ─────────────────────────────────────────────────────────────────────────
    # Assignment
    # ─────────────────────────────────────────────────────────────────────────

    def assign_exam(self, student: StudentInfo) -> AssignedExam:
        """
        Assign, check and record one student's exam.

        Raises:
            GenerationError: Any assignment or consistency failure (the
                specific subclass names the problem)
        """
        if self._failed:
            raise GenerationError(
                f"Cannot assign an exam to {student.uniqname!r}: an earlier assignment failed"
            )
        if student.uniqname in self.assigned_exams_by_uniqname:
            self._failed = True
            raise GenerationError(f"Student {student.uniqname!r} was already assigned an exam")

        logger.info(f"Creating randomized exam for {student.uniqname}...")
        try:
            ae = self._builder.build(student)
            self._checker.check(ae)
        except GenerationError:
            self._failed = True
            raise

        self.assigned_exams.append(ae)
        self.assigned_exams_by_uniqname[student.uniqname] = ae
        return ae

    def assign_exams(self, students: Iterable[StudentInfo]) -> List[AssignedExam]:
        """Assign exams to every student in roster order."""
        start_time = time.perf_counter()
        result = [self.assign_exam(s) for s in students]
        elapsed = time.perf_counter() - start_time
        logger.info(f"Assigned {len(result)} exams in {elapsed:.2f}s")
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def create_manifests(self) -> List[Dict[str, Any]]:
        self._ensure_exportable()
        return [ae.create_manifest() for ae in self.assigned_exams]

    def stats(self) -> Dict[str, Any]:
        """Usage counts per section_id/question_id across all assigned exams."""
        return self._checker.stats()

    def filenames(self) -> List[Tuple[str, str]]:
        """(uniqname, filename base) pairs sorted by uniqname."""
        return [
            (ae.student.uniqname, ae.filename_base)
            for ae in sorted(self.assigned_exams, key=lambda ae: ae.student.uniqname)
        ]

    def write_all(
        self,
        exam_dir: Path = Path("out"),
        manifest_dir: Path = Path("data"),
        renderer: Optional[Renderer] = None,
    ) -> WriteResult:
        """
        Write manifests, stats, the student id table, media and documents.

        Layout:
            <manifest_dir>/<exam_id>/manifests/<uniqname>-<uuid>.json
            <manifest_dir>/<exam_id>/stats.json
            <manifest_dir>/<exam_id>/student-ids.csv
            <exam_dir>/<exam_id>/exams/<frontend_media_dir>/...
            <exam_dir>/<exam_id>/exams/<uniqname>-<uuid>.html  (with renderer)

        Previous contents of the manifests and exams directories are removed.

        Args:
            exam_dir: Root for rendered exams and media
            manifest_dir: Root for manifests and run data
            renderer: Optional callable producing a document per exam

        Raises:
            GenerationError: If the generator failed earlier
        """
        self._ensure_exportable()

        exam_id = self.exam.exam_id
        exams_out = Path(exam_dir) / exam_id / "exams"
        data_out = Path(manifest_dir) / exam_id
        manifests_out = data_out / "manifests"

        _reset_directory(exams_out)
        _reset_directory(manifests_out)

        self._write_media(exams_out / self.config.frontend_media_dir)

        stats_path = data_out / "stats.json"
        save_stats_json(stats_path, self.stats())

        ordered = sorted(self.assigned_exams, key=lambda ae: ae.student.uniqname)
        manifest_paths: List[Path] = []
        document_paths: List[Path] = []
        for i, ae in enumerate(ordered, 1):
            filename_base = ae.filename_base
            manifest_path = manifests_out / f"{filename_base}.json"
            logger.info(
                f"{i}/{len(ordered)} Saving assigned exam manifest for "
                f"{ae.student.uniqname} to {manifest_path.name}"
            )
            save_manifest_json(manifest_path, ae.create_manifest())
            manifest_paths.append(manifest_path)

            if renderer is not None:
                document_path = exams_out / f"{filename_base}.html"
                logger.info(
                    f"{i}/{len(ordered)} Saving assigned exam document for "
                    f"{ae.student.uniqname} to {document_path.name}"
                )
                document_path.write_text(
                    renderer(ae, self.config.frontend_js_path), encoding="utf-8"
                )
                document_paths.append(document_path)

        student_ids_path = data_out / "student-ids.csv"
        save_student_ids_csv(student_ids_path, self.filenames())
        logger.info(f"Wrote {len(manifest_paths)} manifests to {manifests_out}")

        return WriteResult(
            manifest_paths=tuple(manifest_paths),
            document_paths=tuple(document_paths),
            stats_path=stats_path,
            student_ids_path=student_ids_path,
        )

    def _ensure_exportable(self) -> None:
        if self._failed:
            raise GenerationError(
                "Refusing to export results of a failed generation run"
            )

    def _write_media(self, media_out: Path) -> None:
        """Copy exam media plus media of every section/question actually assigned."""
        if self.exam.media_dir:
            _copy_media(Path(self.exam.media_dir), media_out / "exam" / self.exam.exam_id)
        for section_id, entry in self._checker.sections.items():
            if entry.representative.media_dir:
                _copy_media(Path(entry.representative.media_dir), media_out / "section" / section_id)
        for question_id, entry in self._checker.questions.items():
            if entry.representative.media_dir:
                _copy_media(Path(entry.representative.media_dir), media_out / "question" / question_id)


def _reset_directory(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def _copy_media(source: Path, destination: Path) -> None:
    if not source.is_dir():
        raise FileNotFoundError(f"Media directory not found: {source}")
    shutil.copytree(source, destination, dirs_exist_ok=True)
    logger.debug(f"Copied media {source} -> {destination}")
