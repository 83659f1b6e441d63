"""
Module: builder.config

Purpose:
    Configuration dataclass for exam generation. Immutable configuration
    with validation on construction, so configuration mistakes surface
    before any student is processed.

Key Classes:
    - GeneratorConfig: Main configuration for generating exams

Dependencies:
    - dataclasses (std)

Used By:
    - builder.controller: ExamGenerator
    - builder.assignment: AssignmentBuilder
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from exam_toolkit.core.errors import ConfigurationError

from .uuid_strategy import UuidStrategy, namespace_uuid


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Configuration for generating exams (immutable).

    Attributes:
        uuid_strategy: How student identifiers are derived (strings such as
            "uuidv5" are accepted and converted)
        uuidv5_namespace: Namespace for UUIDV5, at least 16 characters
        choose_all: Every chooser returns its whole pool (previews)
        allow_duplicates: Allow several skins/instances per slot
        consistent_randomization: All students share one seed for selection,
            so everyone gets the same sections/questions/skins
        frontend_js_path: Script path referenced by rendered exams
        frontend_media_dir: Media directory name next to rendered exams

    Example:
        >>> config = GeneratorConfig(uuid_strategy="uuidv5",
        ...                          uuidv5_namespace="0123456789abcdef")
        >>> config.uuid_strategy
        <UuidStrategy.UUIDV5: 'uuidv5'>
    """

    uuid_strategy: UuidStrategy = UuidStrategy.PLAIN
    uuidv5_namespace: Optional[str] = None
    choose_all: bool = False
    allow_duplicates: bool = False
    consistent_randomization: bool = False

    # Rendering collaborators
    frontend_js_path: str = "js/frontend.js"
    frontend_media_dir: str = "media"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "uuid_strategy", UuidStrategy.parse(self.uuid_strategy))
        if self.uuid_strategy is UuidStrategy.UUIDV5 and not self.uuidv5_namespace:
            raise ConfigurationError(
                "If uuidv5 identifiers are selected, a uuidv5_namespace must be specified"
            )
        if self.uuidv5_namespace:
            namespace_uuid(self.uuidv5_namespace)
        if not self.frontend_media_dir:
            raise ConfigurationError("frontend_media_dir may not be empty")

    @property
    def reproducible(self) -> bool:
        """True unless identifiers are random."""
        return self.uuid_strategy is not UuidStrategy.UUIDV4
