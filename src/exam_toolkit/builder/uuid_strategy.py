"""
Module: builder.uuid_strategy

Purpose:
    How per-student identifiers are derived for exams, sections and
    questions.

Key Classes:
    - UuidStrategy: PLAIN / UUIDV4 / UUIDV5

Key Functions:
    - create_student_uuid(): Identifier for one student's instance of an id

Used By:
    - builder.config: GeneratorConfig
    - builder.assignment: AssignmentBuilder
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from exam_toolkit.core.errors import ConfigurationError
from exam_toolkit.core.models.students import StudentInfo

if TYPE_CHECKING:
    from .config import GeneratorConfig

MIN_UUIDV5_NAMESPACE_LENGTH = 16


class UuidStrategy(Enum):
    """
    Controls how student-specific identifiers are created.

    Attributes:
        PLAIN: "<uniqname>-<id>". Fully reproducible and human readable.
        UUIDV4: Random uuid4. Not reproducible; use only when exams will
            never be regenerated.
        UUIDV5: uuid5 of "<uniqname>-<id>" in a configured namespace.
            Reproducible but opaque.

    Example:
        >>> UuidStrategy.parse("uuidv5")
        <UuidStrategy.UUIDV5: 'uuidv5'>
    """

    PLAIN = "plain"
    UUIDV4 = "uuidv4"
    UUIDV5 = "uuidv5"

    @classmethod
    def parse(cls, value: Union[str, UuidStrategy]) -> UuidStrategy:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown uuid strategy {value!r} (expected one of: {valid})"
            ) from None


def namespace_uuid(namespace: str) -> uuid.UUID:
    """
    Turn a configured namespace string into a UUID.

    A namespace that is itself a UUID string is used as is; otherwise the
    first 16 bytes of its UTF-8 encoding are the namespace UUID.

    Raises:
        ConfigurationError: If the namespace is shorter than 16 characters
    """
    if len(namespace) < MIN_UUIDV5_NAMESPACE_LENGTH:
        raise ConfigurationError(
            f"uuidv5 namespace must be at least {MIN_UUIDV5_NAMESPACE_LENGTH} characters"
        )
    try:
        return uuid.UUID(namespace)
    except ValueError:
        return uuid.UUID(bytes=namespace.encode("utf-8")[:MIN_UUIDV5_NAMESPACE_LENGTH])


def create_student_uuid(
    config: GeneratorConfig,
    student: StudentInfo,
    entity_id: str,
) -> str:
    """
    Create the identifier for a student's instance of an exam/section/question.

    Args:
        config: Generator configuration (strategy and namespace)
        student: Student the entity is assigned to
        entity_id: Exam id, or "<exam_id>-s-<section_id>" /
            "<exam_id>-q-<question_id>"

    Returns:
        Identifier string

    Example:
        >>> create_student_uuid(GeneratorConfig(), StudentInfo("abc123", "A"), "examX")
        'abc123-examX'
    """
    strategy = config.uuid_strategy
    name = f"{student.uniqname}-{entity_id}"
    if strategy is UuidStrategy.PLAIN:
        return name
    if strategy is UuidStrategy.UUIDV4:
        return str(uuid.uuid4())
    if strategy is UuidStrategy.UUIDV5:
        namespace: Optional[str] = config.uuidv5_namespace
        if not namespace:
            raise ConfigurationError("uuidv5 strategy requires a uuidv5_namespace")
        return str(uuid.uuid5(namespace_uuid(namespace), name))
    raise ConfigurationError(f"Unhandled uuid strategy: {strategy!r}")
