"""
Unit Tests for UUID Strategies and Generator Configuration
"""

import uuid

import pytest

from exam_toolkit.builder import GeneratorConfig, UuidStrategy, create_student_uuid
from exam_toolkit.builder.uuid_strategy import namespace_uuid
from exam_toolkit.core.errors import ConfigurationError
from exam_toolkit.core.models import StudentInfo


NAMESPACE = "0123456789abcdef"


@pytest.fixture
def student() -> StudentInfo:
    return StudentInfo("abc123", "Alice")


class TestCreateStudentUuid:
    """Tests for create_student_uuid()."""

    def test_plain_when_called_then_uniqname_dash_id(self, student):
        assert create_student_uuid(GeneratorConfig(), student, "examX") == "abc123-examX"

    def test_plain_when_section_entity_then_includes_prefix(self, student):
        result = create_student_uuid(GeneratorConfig(), student, "examX-s-intro")
        assert result == "abc123-examX-s-intro"

    def test_uuidv5_when_repeated_then_stable(self, student):
        config = GeneratorConfig(uuid_strategy="uuidv5", uuidv5_namespace=NAMESPACE)

        first = create_student_uuid(config, student, "examX")
        assert all(create_student_uuid(config, student, "examX") == first for _ in range(5))
        assert uuid.UUID(first).version == 5

    def test_uuidv5_when_different_entity_then_differs(self, student):
        config = GeneratorConfig(uuid_strategy="uuidv5", uuidv5_namespace=NAMESPACE)

        assert create_student_uuid(config, student, "examX") != create_student_uuid(config, student, "examY")

    def test_uuidv5_when_different_namespace_then_differs(self, student):
        a = GeneratorConfig(uuid_strategy="uuidv5", uuidv5_namespace=NAMESPACE)
        b = GeneratorConfig(uuid_strategy="uuidv5", uuidv5_namespace="fedcba9876543210")

        assert create_student_uuid(a, student, "examX") != create_student_uuid(b, student, "examX")

    def test_uuidv4_when_called_twice_then_random(self, student):
        config = GeneratorConfig(uuid_strategy=UuidStrategy.UUIDV4)

        first = create_student_uuid(config, student, "examX")
        assert uuid.UUID(first).version == 4
        assert first != create_student_uuid(config, student, "examX")


class TestNamespaceUuid:
    def test_namespace_when_uuid_string_then_used_directly(self):
        ns = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"
        assert namespace_uuid(ns) == uuid.UUID(ns)

    def test_namespace_when_plain_string_then_first_sixteen_bytes(self):
        assert namespace_uuid(NAMESPACE + "tail").bytes == NAMESPACE.encode("utf-8")

    def test_namespace_when_too_short_then_raises(self):
        with pytest.raises(ConfigurationError, match="16"):
            namespace_uuid("short")


class TestGeneratorConfig:
    """Tests for GeneratorConfig validation."""

    def test_config_when_defaults_then_plain_and_reproducible(self):
        config = GeneratorConfig()

        assert config.uuid_strategy is UuidStrategy.PLAIN
        assert config.reproducible
        assert not config.choose_all
        assert not config.allow_duplicates
        assert not config.consistent_randomization

    def test_config_when_strategy_string_then_parsed(self):
        config = GeneratorConfig(uuid_strategy="uuidv4")

        assert config.uuid_strategy is UuidStrategy.UUIDV4
        assert not config.reproducible

    def test_config_when_unknown_strategy_then_raises(self):
        with pytest.raises(ConfigurationError, match="uuidv6"):
            GeneratorConfig(uuid_strategy="uuidv6")

    def test_config_when_uuidv5_without_namespace_then_raises(self):
        with pytest.raises(ConfigurationError, match="namespace"):
            GeneratorConfig(uuid_strategy="uuidv5")

    def test_config_when_uuidv5_namespace_too_short_then_raises(self):
        with pytest.raises(ConfigurationError):
            GeneratorConfig(uuid_strategy="uuidv5", uuidv5_namespace="0123456789")

    def test_config_when_empty_media_dir_then_raises(self):
        with pytest.raises(ConfigurationError):
            GeneratorConfig(frontend_media_dir="")

    def test_config_when_frozen_then_immutable(self):
        config = GeneratorConfig()
        with pytest.raises(AttributeError):
            config.choose_all = True
