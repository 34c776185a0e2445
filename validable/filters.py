"""Field-set filters.

Compare the field names of an object with a reference set of names:

- whitelist: every field of the target must be allowed
- blacklist: no field of the target may be forbidden
- requirelist: every required name must be a field of the target

Violations are returned as a validation error mapping. Misuse (falsy target,
reference set that is not a collection) raises ContractError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from .const import MSG_FORBIDDEN, MSG_NOT_ALLOWED, MSG_REQUIRED
from .exceptions import ContractError
from .helpers import ValidationErrors, format_message, is_falsy, iter_fields

_LOGGER = logging.getLogger(__name__)


class FilterMode(str, Enum):
    """How the target fields are compared with the reference set."""

    WHITELIST = "whitelist"  # target fields must be in the reference set
    BLACKLIST = "blacklist"  # target fields must not be in the reference set
    REQUIRE = "require"  # reference names must be target fields


def _reference_names(reference: Any) -> tuple[list[Any], set[Any]]:
    if is_falsy(reference):
        raise ContractError("Reference set must not be falsy")
    if isinstance(reference, (str, bytes)) or not isinstance(reference, Iterable):
        raise ContractError(
            f"Reference set must be a collection of field names, got {type(reference).__name__}"
        )

    names = list(reference)
    try:
        return names, set(names)
    except TypeError as err:
        raise ContractError(f"Reference set contains unhashable names: {err}") from err


def filter_fields(
    target: Any, reference: Any, mode: FilterMode | str
) -> ValidationErrors | None:
    """Check the fields of target against a reference set of names.

    Args:
        target: Mapping or object whose fields are checked
        reference: Collection of field names
        mode: Comparison to perform (a FilterMode or its value)

    Returns:
        None when there is no violation, otherwise a mapping from each
        offending field name to its list of messages

    Raises:
        ContractError: If target or reference is falsy, reference is not a
            collection, target fields cannot be enumerated, or mode is unknown
    """
    try:
        mode = FilterMode(mode)
    except (ValueError, TypeError):
        raise ContractError(f"Unknown filter mode: {mode!r}") from None

    if is_falsy(target):
        raise ContractError("Cannot filter a falsy target")

    ordered, names = _reference_names(reference)
    fields = [field for field, _ in iter_fields(target)]

    if mode is FilterMode.WHITELIST:
        errors = {
            field: [format_message(field, MSG_NOT_ALLOWED)]
            for field in fields
            if field not in names
        }
    elif mode is FilterMode.BLACKLIST:
        errors = {
            field: [format_message(field, MSG_FORBIDDEN)]
            for field in fields
            if field in names
        }
    else:
        present = set(fields)
        errors = {
            name: [format_message(name, MSG_REQUIRED)]
            for name in ordered
            if name not in present
        }

    if errors:
        _LOGGER.debug("%s check failed for fields: %s", mode.value, list(errors))
    return errors or None


def whitelist(target: Any, allowed: Any) -> ValidationErrors | None:
    """Report every field of target that is not in allowed."""
    return filter_fields(target, allowed, FilterMode.WHITELIST)


def blacklist(target: Any, forbidden: Any) -> ValidationErrors | None:
    """Report every field of target that is in forbidden."""
    return filter_fields(target, forbidden, FilterMode.BLACKLIST)


def requirelist(target: Any, required: Any) -> ValidationErrors | None:
    """Report every name of required that is not a field of target."""
    return filter_fields(target, required, FilterMode.REQUIRE)
