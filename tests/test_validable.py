"""Tests for the Validable capability."""

import dataclasses
import types

import pytest

from validable import ContractError, Validable, ValidationError, mixin


@dataclasses.dataclass(slots=True)
class SlottedRecord:
    """Record without an instance dict."""

    str: str
    num: int


class TestValidateInstance:
    """Test validating a whole instance."""

    def test_good_fields(self, mocky):
        """Test a valid instance has no errors."""
        assert mocky.validate() is None

    def test_inconsistent_field(self, mocky):
        """Test an invalid field is reported alone."""
        mocky.str = "a123bcd"

        errors = mocky.validate()

        assert list(errors) == ["str"]
        assert errors["str"] == ["Str is invalid"]

    def test_missing_required_field(self, mocky):
        """Test a None required field is reported."""
        mocky.req1 = None

        errors = mocky.validate()

        assert errors == {"req1": ["Req1 can't be blank"]}

    def test_absent_attribute_is_missing(self, mock_class):
        """Test an attribute never set counts as a missing field."""
        errors = mock_class(str="abc", req1="x").validate()

        assert list(errors) == ["req2"]

    def test_blank_required_field(self, mocky):
        """Test whitespace-only strings are blank when empty values are not allowed."""
        mocky.req2 = "   "

        assert mocky.validate() == {"req2": ["Req2 can't be blank"]}

    def test_several_errors_on_one_field(self, mocky):
        """Test every failing validator of a field is reported."""
        mocky.str = 42

        assert mocky.validate() == {
            "str": ["Str must be of type string", "Str is invalid"]
        }

    def test_result_is_recomputed(self, mocky):
        """Test fixing a field clears its error on the next call."""
        mocky.num = "not a number"
        assert "num" in mocky.validate()

        mocky.num = 7
        assert mocky.validate() is None


class TestValidateInstanceField:
    """Test validating one field of an instance."""

    def test_good_field(self, mocky):
        """Test a valid field has no errors."""
        assert mocky.validate("str") is None

    def test_bad_field(self, mocky):
        """Test only the requested field is validated."""
        mocky.str = "123"
        mocky.req1 = None

        assert mocky.validate("str") == {"str": ["Str is invalid"]}

    def test_unconstrained_field(self, mocky):
        """Test a field without constraints always passes."""
        mocky.extra = object()

        assert mocky.validate("extra") is None

    @pytest.mark.parametrize("field", ["", 42, ("str",)])
    def test_invalid_field_name(self, mocky, field):
        """Test a field name that is not a non-empty string is an internal error."""
        assert mocky.validate(field) == {"_": "Invalid field"}

    @pytest.mark.parametrize("field", ["", 0, False])
    def test_falsy_field_name_is_not_whole_instance(self, mocky, field):
        """Test only None selects the whole instance."""
        mocky.str = "123"

        assert mocky.validate(field) == {"_": "Invalid field"}
        assert mocky.validate(None) == {"str": ["Str is invalid"]}


class TestValidateField:
    """Test the class-level field validation."""

    def test_good_value(self, mock_class):
        """Test a valid value passes."""
        assert mock_class.validate_field("str", "abc") is None

    def test_inconsistent_value(self, mock_class):
        """Test the pattern must match the whole value."""
        errors = mock_class.validate_field("str", "abc123")

        assert "str" in errors

    def test_invalid_field(self, mock_class):
        """Test a callable as field name fails internally."""
        errors = mock_class.validate_field(lambda: "boh", "mah")

        assert isinstance(errors, dict)
        assert "_" in errors

    def test_unknown_field_is_skipped(self, mock_class):
        """Test fields missing from the constraint table are not checked."""
        assert mock_class.validate_field("unknown", None) is None

    def test_presence_is_checked(self, mock_class):
        """Test a required field with no value fails."""
        assert mock_class.validate_field("req1", None) == {
            "req1": ["Req1 can't be blank"]
        }


class TestValidateObjectWeakly:
    """Test weak validation of plain objects."""

    def test_good_properties(self, mock_class, valid_fields):
        """Test a valid object passes."""
        assert mock_class.validate_object(valid_fields, True) is None

    def test_missing_required_property(self, mock_class, valid_fields):
        """Test missing required properties are not reported."""
        del valid_fields["req1"]

        assert mock_class.validate_object(valid_fields, weak=True) is None

    def test_empty(self, mock_class):
        """Test an empty object passes."""
        assert mock_class.validate_object({}, weak=True) is None

    def test_inconsistent_values(self, mock_class, valid_fields):
        """Test present fields are still checked."""
        valid_fields["str"] = "abc123def"

        assert "str" in mock_class.validate_object(valid_fields, weak=True)

    def test_present_but_null_required_property(self, mock_class):
        """Test a required field given as None is reported."""
        errors = mock_class.validate_object({"req1": None}, weak=True)

        assert errors == {"req1": ["Req1 can't be blank"]}

    def test_extra_properties_are_ignored(self, mock_class):
        """Test fields without constraints are not checked."""
        assert mock_class.validate_object({"whatever": 1}, weak=True) is None

    def test_object_with_attributes(self, mock_class):
        """Test objects are enumerated through their attributes."""
        obj = types.SimpleNamespace(str="abc1")

        assert list(mock_class.validate_object(obj, weak=True)) == ["str"]

    def test_slotted_dataclass(self, mock_class):
        """Test slotted dataclasses are enumerated through their slots."""
        record = SlottedRecord(str="abc1", num=5)

        assert mock_class.validate_object(record, weak=True) == {
            "str": ["Str is invalid"]
        }
        assert mock_class.validate_object(SlottedRecord("abc", 5), weak=True) is None

    def test_slotted_dataclass_matches_strict_checks(self, mock_class):
        """Test weak and strict modes agree on the fields present."""
        record = SlottedRecord(str="abc1", num=5)

        strict = mock_class.validate_object(record)

        assert strict["str"] == mock_class.validate_object(record, weak=True)["str"]

    @pytest.mark.parametrize("value", ["abc", 42, object()])
    def test_value_without_fields(self, mock_class, value):
        """Test a truthy value without fields has nothing present to check."""
        assert mock_class.validate_object(value, weak=True) is None


class TestValidateObjectStrictly:
    """Test strict validation of plain objects."""

    def test_good_properties(self, mock_class, valid_fields):
        """Test a valid object passes."""
        assert mock_class.validate_object(valid_fields) is None

    def test_inconsistent_values(self, mock_class, valid_fields):
        """Test an invalid value is reported."""
        valid_fields["str"] = "abc123def"

        assert "str" in mock_class.validate_object(valid_fields)

    def test_empty(self, mock_class):
        """Test both required fields are reported for an empty object."""
        errors = mock_class.validate_object({})

        assert set(errors) == {"req1", "req2"}

    def test_missing_required_property(self, mock_class, valid_fields):
        """Test a missing required field is reported."""
        del valid_fields["req1"]

        assert "req1" in mock_class.validate_object(valid_fields)

    def test_object_with_attributes(self, mock_class, valid_fields):
        """Test objects with attributes are validated like mappings."""
        obj = types.SimpleNamespace(**valid_fields)

        assert mock_class.validate_object(obj) is None

    @pytest.mark.parametrize("obj", [None, False, 0, ""])
    @pytest.mark.parametrize("weak", [True, False])
    def test_falsy_object(self, mock_class, obj, weak):
        """Test falsy objects fail internally."""
        assert mock_class.validate_object(obj, weak) == {
            "_": "Cannot validate falsy object"
        }


class TestValidatePairs:
    """Test validation of (field, value) pairs."""

    def test_pairs(self, mock_class):
        """Test each pair is checked against its field constraint."""
        errors = mock_class.validate_pairs([("str", "1"), ("num", 2), ("req1", "")])

        assert set(errors) == {"str", "req1"}

    def test_no_errors(self, mock_class):
        """Test valid pairs give no result."""
        assert mock_class.validate_pairs([("num", 2)]) is None


class TestEnsureValid:
    """Test the raising validation helper."""

    def test_returns_self_when_valid(self, mocky):
        """Test a valid instance is returned."""
        assert mocky.ensure_valid() is mocky

    def test_raises_with_errors(self, mocky):
        """Test the errors are attached to the exception."""
        mocky.req1 = None

        with pytest.raises(ValidationError) as excinfo:
            mocky.ensure_valid()

        assert excinfo.value.errors == {"req1": ["Req1 can't be blank"]}
        assert str(excinfo.value) == "Validation failed: req1"

    def test_custom_message(self, mocky):
        """Test a custom message replaces the default one."""
        mocky.num = "1"

        with pytest.raises(ValidationError, match="Bad mock"):
            mocky.ensure_valid("Bad mock")


class TestConstraintSetCache:
    """Test compilation of per-class constraint tables."""

    def test_compiled_once(self, mock_class):
        """Test the same compiled table is returned on each call."""
        assert mock_class.constraint_set() is mock_class.constraint_set()

    def test_subclass_constraints(self, mock_class):
        """Test a subclass uses its own table."""

        class Child(mock_class):
            constraints = {"num": {"presence": True}}

        assert Child.constraint_set().fields == ("num",)
        assert mock_class.constraint_set().fields == ("str", "num", "req1", "req2")

    def test_inherited_constraints(self, mock_class):
        """Test a subclass without a table uses its parent's."""

        class Child(mock_class):
            pass

        assert Child.validate_object({}) == mock_class.validate_object({})

    def test_default_table_is_empty(self):
        """Test a bare Validable subclass accepts everything."""

        class Empty(Validable):
            pass

        assert Empty().validate() is None


class Point:
    """Plain class used as mixin base."""

    def __init__(self, x, y):
        self.x = x
        self.y = y


class TestMixin:
    """Test attaching the capability to arbitrary classes."""

    def test_mixin_with_base(self):
        """Test the mixed class keeps the base behavior."""
        ValidablePoint = mixin(
            Point, {"x": {"numericality": True}, "y": {"presence": True}}
        )

        point = ValidablePoint(1, None)

        assert isinstance(point, Point)
        assert isinstance(point, Validable)
        assert ValidablePoint.__name__ == "ValidablePoint"
        assert point.validate() == {"y": ["Y can't be blank"]}

    def test_mixin_without_base(self):
        """Test a plain validable class is created."""
        cls = mixin()

        assert issubclass(cls, Validable)
        assert cls is not Validable
        assert cls().validate() is None

    def test_mixin_inherits_constraints(self):
        """Test constraints default to the inherited ones."""

        class Base:
            constraints = {"x": {"presence": True}}

        cls = mixin(Base)

        assert cls.constraints == {"x": {"presence": True}}
        assert cls().validate() == {"x": ["X can't be blank"]}

    def test_mixin_on_validable_class(self, mock_class):
        """Test mixing into an already validable class does not break the MRO."""
        cls = mixin(mock_class, {"num": {"type": "integer"}})

        assert issubclass(cls, mock_class)
        assert cls(num="x").validate() == {"num": ["Num must be of type integer"]}

    def test_mixin_rejects_non_class(self):
        """Test only classes can be extended."""
        with pytest.raises(ContractError, match="not a class"):
            mixin(42)
