"""Compiled constraint table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..const import INTERNAL_ERROR_KEY, MSG_INVALID_FIELD
from ..exceptions import ConstraintDefinitionError, ContractError
from ..helpers import ValidationErrors, is_field_name, iter_fields, read_field
from .field_constraint import FieldConstraint

_LOGGER = logging.getLogger(__name__)


class ConstraintSet:
    """Read-only table of compiled field constraints.

    Results follow a single shape: None when everything is valid, otherwise
    a dict mapping each invalid field to its list of messages, in table
    order.
    """

    def __init__(self, constraints: Mapping[str, Any] | None) -> None:
        """Compile a constraint table.

        Args:
            constraints: Mapping from field name to constraint descriptor

        Raises:
            ConstraintDefinitionError: If the table or one of its descriptors
                is malformed
        """
        self.source = constraints
        if constraints is None:
            constraints = {}
        if not isinstance(constraints, Mapping):
            raise ConstraintDefinitionError(
                f"Constraint table must be a mapping, got {type(constraints).__name__}"
            )

        self._fields: dict[str, FieldConstraint] = {}
        for field, descriptor in constraints.items():
            if not is_field_name(field):
                raise ConstraintDefinitionError(
                    f"Constraint table keys must be non-empty strings, got {field!r}"
                )
            self._fields[field] = FieldConstraint(field, descriptor)

        self.constraints = MappingProxyType(dict(constraints))
        _LOGGER.debug("Compiled constraint table with %d fields", len(self._fields))

    @property
    def fields(self) -> tuple[str, ...]:
        """Return the constrained field names, in table order."""
        return tuple(self._fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        """Return the fields that must be present."""
        return tuple(
            field
            for field, constraint in self._fields.items()
            if constraint.checks_presence
        )

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def validate(self, data: Any) -> ValidationErrors | None:
        """Validate every constrained field of data.

        Missing fields are read as None, so presence rules apply to them.

        Args:
            data: Mapping or object holding the field values
        """
        errors: ValidationErrors = {}
        for field, constraint in self._fields.items():
            messages = constraint.check(read_field(data, field))
            if messages:
                errors[field] = messages
        return errors or None

    def validate_one(self, field: Any, value: Any) -> ValidationErrors | None:
        """Validate a value for a single field.

        Fields without a constraint entry are not checked at all.

        Returns:
            None when valid or unconstrained, the field errors otherwise, or
            the internal error {"_": "Invalid field"} when field is not a
            non-empty string
        """
        if not is_field_name(field):
            return {INTERNAL_ERROR_KEY: MSG_INVALID_FIELD}

        constraint = self._fields.get(field)
        if constraint is None:
            return None

        messages = constraint.check(value)
        return {field: messages} if messages else None

    def validate_pairs(self, pairs: Iterable[tuple[Any, Any]]) -> ValidationErrors | None:
        """Validate (field, value) pairs, later pairs overriding earlier ones."""
        errors: ValidationErrors = {}
        for field, value in pairs:
            result = self.validate_one(field, value)
            if result:
                errors.update(result)
        return errors or None

    def validate_some(self, data: Any) -> ValidationErrors | None:
        """Validate only the fields present in data.

        Missing fields are never reported, even when a presence rule applies.
        A value without enumerable fields, such as a string, has no present
        fields and therefore passes.
        """
        try:
            pairs = iter_fields(data)
        except ContractError:
            _LOGGER.debug("No fields to enumerate on %s", type(data).__name__)
            return None
        return self.validate_pairs(pairs)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ConstraintSet(fields={list(self._fields)!r})"
