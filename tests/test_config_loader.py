"""Tests for loading constraint tables from YAML."""

import pytest

from validable import (
    ConstraintDefinitionError,
    load_constraints,
    mixin,
    parse_constraints,
)


class TestLoadConstraints:
    """Test load_constraints()."""

    def test_load_file(self, tmp_path, constraints_yaml):
        """Test a YAML file is loaded as a constraint table."""
        config_file = tmp_path / "constraints.yaml"
        config_file.write_text(constraints_yaml, encoding="utf-8")

        constraints = load_constraints(config_file)

        assert list(constraints) == ["str", "num", "req1", "req2"]
        assert constraints["num"] == {"type": "integer"}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Constraint file not found"):
            load_constraints(tmp_path / "missing.yaml")

    def test_loaded_table_validates_like_literal(
        self, tmp_path, constraints_yaml, mock_class, valid_fields
    ):
        """Test YAML tables behave like the equivalent literal table."""
        config_file = tmp_path / "constraints.yaml"
        config_file.write_text(constraints_yaml, encoding="utf-8")
        Entity = mixin(constraints=load_constraints(str(config_file)))

        assert Entity.validate_object(valid_fields) is None
        assert Entity.validate_object({}) == mock_class.validate_object({})
        assert Entity.validate_field("str", "ABC") is None
        assert Entity.validate_field("str", "abc123") == mock_class.validate_field(
            "str", "abc123"
        )


class TestParseConstraints:
    """Test parse_constraints()."""

    def test_without_version(self):
        """Test the version is optional."""
        constraints = parse_constraints("constraints:\n  name: {presence: true}\n")

        assert constraints == {"name": {"presence": True}}

    def test_null_descriptor(self):
        """Test empty descriptors are accepted."""
        assert parse_constraints("constraints:\n  name:\n") == {"name": None}

    @pytest.mark.parametrize(
        "text,message",
        [
            ("", "is empty"),
            ("- a\n- b\n", "must contain a mapping"),
            ("version: 2.0\nconstraints: {}\n", "version 2.0 not supported"),
            ("version: 1.0\n", "missing a 'constraints' mapping"),
            ("constraints: [a, b]\n", "missing a 'constraints' mapping"),
            ("constraints:\n  name: required\n", "must be a mapping"),
            ("constraints:\n  1: {presence: true}\n", "must be strings"),
            ("constraints:\n  name: {bogus: 1}\n", "unknown validator 'bogus'"),
            ("constraints:\n  name: {length: {minimum: '3'}}\n", "must be a number"),
            ("constraints:\n  age: {numericality: {greaterThan: ten}}\n", "must be a number"),
            ("constraints: {name: [\n", "Invalid YAML"),
        ],
    )
    def test_invalid_documents(self, text, message):
        """Test malformed documents raise ConstraintDefinitionError."""
        with pytest.raises(ConstraintDefinitionError, match=message):
            parse_constraints(text, source="test.yaml")
