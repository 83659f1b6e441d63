"""
Utils Package

Serialization of specification files, rosters and generation artifacts.
"""

from .serialization import (
    RosterError,
    loads_exam_specification,
    dumps_exam_specification,
    load_exam_specification,
    save_exam_specification,
    load_exam,
    load_csv_roster,
    save_manifest_json,
    load_manifest_json,
    save_stats_json,
    save_student_ids_csv,
)

__all__ = [
    "RosterError",
    "loads_exam_specification",
    "dumps_exam_specification",
    "load_exam_specification",
    "save_exam_specification",
    "load_exam",
    "load_csv_roster",
    "save_manifest_json",
    "load_manifest_json",
    "save_stats_json",
    "save_student_ids_csv",
]
