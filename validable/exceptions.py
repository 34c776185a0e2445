"""Exceptions raised by the Validable library.

Validation failures are normally returned as data (a mapping from field name
to a list of messages). The exceptions below are raised instead when a caller
breaks an API precondition, when a constraint table cannot be understood, or
when the caller explicitly asks for a raising check.
"""

from __future__ import annotations

from typing import Any, Mapping

from .const import MSG_VALIDATION_FAILED


class ContractError(ValueError):
    """API misuse by the caller.

    Raised when a precondition of a public operation is violated, for example
    a falsy target passed to a field-set filter, a reference set that is not
    a collection, or a malformed error mapping passed to merge(). This signals
    a programming error, not invalid data.

    Example:
        >>> whitelist(None, ["a"])  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ContractError: Cannot filter a falsy target
    """


class ConstraintDefinitionError(ContractError):
    """A constraint table or descriptor cannot be compiled.

    Raised for unknown validator options, malformed option values and
    constraint files with the wrong shape.
    """


class ValidationError(ValueError):
    """Raised on request when an entity does not satisfy its constraints.

    Attributes:
        errors: Mapping from field name to the list of validation messages
    """

    def __init__(
        self, errors: Mapping[str, Any] | None, message: str | None = None
    ) -> None:
        """Initialize the error.

        Args:
            errors: Validation errors, as returned by validate()
            message: Error message (default: "Validation failed")
        """
        super().__init__(message or MSG_VALIDATION_FAILED)
        self.errors = dict(errors or {})

    def __str__(self) -> str:
        """Return the message followed by the invalid field names."""
        message = super().__str__()
        if not self.errors:
            return message
        return f"{message}: {', '.join(str(key) for key in self.errors)}"
