"""Helper functions shared by the validators and the field-set filters."""

from __future__ import annotations

import numbers
import re
from collections.abc import Iterator, Mapping
from typing import Any

from .const import VERBATIM_PREFIX
from .exceptions import ContractError

# Mapping from field name to the list of messages for that field
ValidationErrors = dict[str, Any]


def is_falsy(value: Any) -> bool:
    """Check whether an argument counts as "no object at all".

    None, False, numeric zero and empty strings are falsy. Containers are
    never falsy: an empty mapping is still an object that can be validated.

    Examples:
        >>> is_falsy(None), is_falsy(0), is_falsy("")
        (True, True, True)
        >>> is_falsy({})
        False
    """
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes)):
        return not value
    if isinstance(value, numbers.Number):
        return value == 0
    return False


def is_field_name(field: Any) -> bool:
    """Check whether field is usable as a field name (a non-empty string)."""
    return isinstance(field, str) and bool(field)


def read_field(data: Any, field: str) -> Any:
    """Read a field from a mapping or an object, None when absent."""
    if isinstance(data, Mapping):
        return data.get(field)
    return getattr(data, field, None)


_SLOT_SKIP = frozenset(("__dict__", "__weakref__"))
_MISSING = object()


def _slot_names(cls: type) -> list[str] | None:
    """Collect the slot names declared along the MRO, None when there are none."""
    names: list[str] = []
    declared = False
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__")
        if slots is None:
            continue
        declared = True
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in _SLOT_SKIP and name not in names:
                names.append(name)
    return names if declared else None


def iter_fields(data: Any) -> Iterator[tuple[Any, Any]]:
    """Iterate over the (field, value) pairs actually present in data.

    Mappings yield their items. Objects yield their instance attributes,
    then any slots that are set, so slotted dataclasses are enumerable too.

    Examples:
        >>> list(iter_fields({"a": 1}))
        [('a', 1)]

    Raises:
        ContractError: If data is neither a mapping nor an object with
            instance attributes or slots
    """
    if isinstance(data, Mapping):
        return iter(data.items())
    attributes = getattr(data, "__dict__", None)
    slots = _slot_names(type(data))
    if not isinstance(attributes, Mapping) and slots is None:
        raise ContractError(f"Cannot enumerate fields of {type(data).__name__}")
    pairs = list(attributes.items()) if isinstance(attributes, Mapping) else []
    for name in slots or ():
        value = getattr(data, name, _MISSING)
        if value is not _MISSING:
            pairs.append((name, value))
    return iter(pairs)


def prettify(name: Any) -> str:
    """Turn a field name into lower-case words.

    Examples:
        >>> prettify("firstName")
        'first name'
        >>> prettify("billing.zip_code")
        'billing zip code'
    """
    text = re.sub(r"(\S)\.(\S)", r"\1 \2", str(name))
    text = text.replace("\\", "")
    text = re.sub(r"[_-]", " ", text)
    text = re.sub(
        r"([a-z])([A-Z])",
        lambda match: f"{match.group(1)} {match.group(2).lower()}",
        text,
    )
    return text.lower()


def format_message(field: Any, message: str) -> str:
    """Build the final message for a field.

    A message starting with "^" is returned verbatim (without the caret),
    anything else is prefixed with the capitalized, prettified field name.

    Examples:
        >>> format_message("req_1", "can't be blank")
        "Req 1 can't be blank"
        >>> format_message("age", "^Too young")
        'Too young'
    """
    if message.startswith(VERBATIM_PREFIX):
        return message[len(VERBATIM_PREFIX):]
    name = prettify(field)
    return f"{name[:1].upper()}{name[1:]} {message}"


def interpolate(message: str, **values: Any) -> str:
    """Replace {name} placeholders in message, leaving other braces alone."""
    for key, value in values.items():
        message = message.replace(f"{{{key}}}", str(value))
    return message
