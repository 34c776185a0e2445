"""Merging of validation error mappings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .exceptions import ContractError
from .helpers import ValidationErrors


def merge(*error_maps: Mapping[str, Sequence[str]] | None) -> ValidationErrors | None:
    """Combine validation error mappings field by field.

    Messages of a field present in several mappings are concatenated in
    argument order. None arguments (successful validations) are skipped.

    Returns:
        None when no mapping is given, otherwise a new mapping with new lists

    Raises:
        ContractError: If an argument is not a mapping, or a field's messages
            are not a list or tuple

    Examples:
        >>> merge({"a": ["1"]}, {"a": ["2"], "b": ["3"]})
        {'a': ['1', '2'], 'b': ['3']}
        >>> merge() is None
        True
    """
    maps = [errors for errors in error_maps if errors is not None]
    if not maps:
        return None

    merged: ValidationErrors = {}
    for errors in maps:
        if not isinstance(errors, Mapping):
            raise ContractError(
                f"Cannot merge {type(errors).__name__}: expected a mapping"
            )
        for field, messages in errors.items():
            if isinstance(messages, (str, bytes)) or not isinstance(messages, Sequence):
                raise ContractError(
                    f"Messages of field {field!r} must be a sequence, "
                    f"got {type(messages).__name__}"
                )
            merged.setdefault(field, []).extend(messages)
    return merged
