"""Validable capability: constraint validation for entity types.

An entity type declares a ``constraints`` class attribute mapping field names
to constraint descriptors, and gets instance and class-level validation:

    class User(Validable):
        constraints = {
            "name": {"type": "string", "presence": {"allow_empty": False}},
            "email": {"email": True},
        }

    User(name="", email="x").validate()
    # {'name': ["Name can't be blank"], 'email': ['Email is not a valid email']}

The table is compiled once per class; validation results are never cached
on instances.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, TypeVar

from .const import INTERNAL_ERROR_KEY, MSG_FALSY_OBJECT, MSG_INVALID_FIELD
from .engine import ConstraintSet
from .exceptions import ContractError, ValidationError
from .helpers import ValidationErrors, is_falsy, is_field_name

_LOGGER = logging.getLogger(__name__)

_V = TypeVar("_V", bound="Validable")


class Validable:
    """Base class making an entity type validable.

    Subclasses set ``constraints``; instances expose their field values as
    attributes. A missing attribute is treated as a missing (None) field.
    """

    # Set by subclasses, or inherited from a mixed-in base class
    constraints: ClassVar[Mapping[str, Any]]

    @classmethod
    def constraint_set(cls) -> ConstraintSet:
        """Return the compiled constraint table of this class.

        Raises:
            ConstraintDefinitionError: If the table cannot be compiled
        """
        table = getattr(cls, "constraints", None)
        compiled = cls.__dict__.get("_constraint_set")
        if compiled is None or compiled.source is not table:
            compiled = ConstraintSet(table)
            cls._constraint_set = compiled
            _LOGGER.debug("Compiled constraints of %s", cls.__qualname__)
        return compiled

    def validate(self, field: str | None = None) -> ValidationErrors | None:
        """Validate this instance, or just one of its fields.

        Only None selects the whole instance. Other falsy names such as ""
        or 0 are not field names and give the internal error result rather
        than a full validation.

        Args:
            field: Name of the single field to validate (default: all fields)

        Returns:
            None when valid, otherwise a mapping from field name to messages,
            or {"_": "Invalid field"} when field is not a non-empty string

        Examples:
            >>> user.validate()  # doctest: +SKIP
            >>> user.validate("email")  # doctest: +SKIP
        """
        if field is None:
            return self.constraint_set().validate(self)
        if not is_field_name(field):
            return {INTERNAL_ERROR_KEY: MSG_INVALID_FIELD}
        return self.validate_field(field, getattr(self, field, None))

    @classmethod
    def validate_field(cls, field: str, value: Any) -> ValidationErrors | None:
        """Validate an arbitrary value for a field, without an instance.

        Nothing is checked when the field has no constraint entry.

        Examples:
            >>> User.validate_field("email", "pikachu@poke.mon")  # doctest: +SKIP
        """
        return cls.constraint_set().validate_one(field, value)

    @classmethod
    def validate_object(cls, obj: Any, weak: bool = False) -> ValidationErrors | None:
        """Validate a plain object as if it were an instance.

        Args:
            obj: Mapping or object holding the field values
            weak: If True, only the fields present in obj are validated, so
                missing required fields are not reported

        Returns:
            None when valid, otherwise a mapping from field name to messages,
            or {"_": "Cannot validate falsy object"} when obj is falsy
        """
        if is_falsy(obj):
            return {INTERNAL_ERROR_KEY: MSG_FALSY_OBJECT}

        constraints = cls.constraint_set()
        if weak:
            return constraints.validate_some(obj)
        return constraints.validate(obj)

    @classmethod
    def validate_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> ValidationErrors | None:
        """Validate a collection of (field, value) pairs."""
        return cls.constraint_set().validate_pairs(pairs)

    def ensure_valid(self: _V, message: str | None = None) -> _V:
        """Return self if valid, raise otherwise.

        Raises:
            ValidationError: With the validation errors attached
        """
        errors = self.validate()
        if errors:
            raise ValidationError(errors, message)
        return self


def mixin(
    base: type | None = None, constraints: Mapping[str, Any] | None = None
) -> type[Validable]:
    """Create a validable class on top of an arbitrary base class.

    Args:
        base: Class to extend (default: a plain validable class)
        constraints: Constraint table of the new class (default: inherited)

    Returns:
        A new class deriving from Validable and base

    Raises:
        ContractError: If base is not a class
    """
    if base is not None and not isinstance(base, type):
        raise ContractError(f"Cannot mix into {base!r}: not a class")

    if base is None or base is object:
        bases: tuple[type, ...] = (Validable,)
        name = "ValidableClass"
        module = __name__
    elif issubclass(base, Validable):
        bases = (base,)
        name = base.__name__
        module = base.__module__
    else:
        bases = (Validable, base)
        name = f"Validable{base.__name__}"
        module = base.__module__

    namespace: dict[str, Any] = {"__module__": module}
    if constraints is not None:
        namespace["constraints"] = constraints

    return type(name, bases, namespace)
