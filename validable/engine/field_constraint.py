"""Compiled constraint for a single field."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import voluptuous as vol

from ..exceptions import ConstraintDefinitionError
from ..helpers import format_message
from .validators import VALIDATOR_BUILDERS, build_presence

_LOGGER = logging.getLogger(__name__)


class FieldConstraint:
    """Constraint descriptor of one field, compiled to voluptuous schemas.

    A descriptor is either a mapping of validator options
    (``{"type": "string", "presence": {"allow_empty": False}}``) or any
    voluptuous validator, which is then run as-is. A None descriptor
    accepts every value.

    Only the presence check sees missing (None) values; every other
    validator is skipped for them.
    """

    def __init__(self, field: str, descriptor: Any) -> None:
        """Compile the descriptor.

        Args:
            field: Field name, used to prefix error messages
            descriptor: Constraint descriptor for the field

        Raises:
            ConstraintDefinitionError: If the descriptor cannot be compiled
        """
        self.field = field
        self.descriptor = descriptor
        self._presence: vol.Schema | None = None
        self._validators: list[vol.Schema] = []

        if descriptor is None or descriptor is False:
            return
        if isinstance(descriptor, Mapping):
            self._compile_options(descriptor)
        elif isinstance(descriptor, vol.Schema):
            self._validators.append(descriptor)
        elif callable(descriptor):
            self._validators.append(vol.Schema(descriptor))
        else:
            raise ConstraintDefinitionError(
                f"Field '{field}': descriptor must be a mapping or a validator, "
                f"got {type(descriptor).__name__}"
            )

    def _compile_options(self, descriptor: Mapping[str, Any]) -> None:
        for name, options in descriptor.items():
            # Disabled option
            if options is None or options is False:
                continue

            if name == "presence":
                self._presence = vol.Schema(build_presence(options))
                continue

            builder = VALIDATOR_BUILDERS.get(name)
            if builder is None:
                raise ConstraintDefinitionError(
                    f"Field '{self.field}': unknown validator '{name}'"
                )
            try:
                self._validators.append(vol.Schema(builder(options)))
            except ConstraintDefinitionError as err:
                raise ConstraintDefinitionError(f"Field '{self.field}': {err}") from err

        _LOGGER.debug(
            "Compiled %d validators for field '%s' (presence: %s)",
            len(self._validators),
            self.field,
            self._presence is not None,
        )

    @property
    def checks_presence(self) -> bool:
        """Return True when a missing value is an error for this field."""
        return self._presence is not None

    def check(self, value: Any) -> list[str]:
        """Validate a value for this field.

        Args:
            value: Value to check (None for a missing field)

        Returns:
            List of error messages, empty when the value is valid
        """
        messages: list[str] = []
        if self._presence is not None:
            messages.extend(self._run(self._presence, value))
        if value is None:
            return messages

        for validator in self._validators:
            messages.extend(self._run(validator, value))
        return messages

    def _run(self, validator: vol.Schema, value: Any) -> list[str]:
        try:
            validator(value)
        except vol.MultipleInvalid as err:
            return [format_message(self.field, str(error.msg)) for error in err.errors]
        except vol.Invalid as err:
            return [format_message(self.field, str(err.msg))]
        return []

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"FieldConstraint({self.field!r}, {self.descriptor!r})"
