"""
Command-line entry point.

    python -m exam_toolkit generate --spec exam.json --roster roster.csv
    python -m exam_toolkit preview --spec exam.json
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from exam_toolkit import __version__
from exam_toolkit.builder import ExamGenerator, GeneratorConfig, UuidStrategy
from exam_toolkit.core.errors import GenerationError
from exam_toolkit.core.models import StudentInfo
from exam_toolkit.core.schemas.validator import ValidationError
from exam_toolkit.core.utils.serialization import RosterError, load_csv_roster, load_exam

logger = logging.getLogger("exam_toolkit")

PREVIEW_STUDENT = StudentInfo(uniqname="preview", name="All Questions Preview")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exam_toolkit",
        description="Generate randomized per-student exams",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Assign exams to every student on a roster")
    gen.add_argument("--spec", type=Path, required=True, help="Exam specification JSON")
    gen.add_argument("--roster", type=Path, required=True, help="Roster CSV (uniqname,name)")
    gen.add_argument("--out", type=Path, default=Path("out"), help="Output root for exams/media")
    gen.add_argument("--data", type=Path, default=Path("data"), help="Output root for manifests")
    gen.add_argument(
        "--uuid-strategy",
        choices=[s.value for s in UuidStrategy],
        default=UuidStrategy.PLAIN.value,
    )
    gen.add_argument("--uuidv5-namespace", default=None)
    gen.add_argument("--choose-all", action="store_true", help="Every chooser selects its whole pool")
    gen.add_argument("--allow-duplicates", action="store_true")
    gen.add_argument(
        "--consistent-randomization",
        action="store_true",
        help="Give every student the same selection",
    )

    preview = sub.add_parser("preview", help="Assign every question to a single preview student")
    preview.add_argument("--spec", type=Path, required=True, help="Exam specification JSON")
    preview.add_argument("--out", type=Path, default=Path("out"))
    preview.add_argument("--data", type=Path, default=Path("data"))

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        exam = load_exam(args.spec)
        if args.command == "preview":
            config = GeneratorConfig(choose_all=True, allow_duplicates=True)
            students = [PREVIEW_STUDENT]
        else:
            config = GeneratorConfig(
                uuid_strategy=args.uuid_strategy,
                uuidv5_namespace=args.uuidv5_namespace,
                choose_all=args.choose_all,
                allow_duplicates=args.allow_duplicates,
                consistent_randomization=args.consistent_randomization,
            )
            students = load_csv_roster(args.roster)

        generator = ExamGenerator(exam, config)
        generator.assign_exams(students)
        result = generator.write_all(args.out, args.data)
    except (GenerationError, ValidationError, RosterError) as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"Done: {len(result.manifest_paths)} manifests, stats at {result.stats_path}")
    return 0
