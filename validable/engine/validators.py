"""Builders turning constraint descriptor options into voluptuous validators.

Each builder takes the value of one descriptor option (for example the
``{"minimum": 3}`` of ``length``) and returns a voluptuous-compatible
validator. Validators raise ``voluptuous.Invalid`` with a raw message; the
field name prefix is added later by FieldConstraint.
"""

from __future__ import annotations

import datetime
import numbers
import re
from collections.abc import Callable, Collection, Mapping
from typing import Any

import voluptuous as vol

from ..const import (
    MSG_BLANK,
    MSG_EMAIL,
    MSG_EQUAL_TO,
    MSG_EVEN,
    MSG_EXCLUDED,
    MSG_FORMAT,
    MSG_GREATER_THAN,
    MSG_GREATER_THAN_OR_EQUAL,
    MSG_LESS_THAN,
    MSG_LESS_THAN_OR_EQUAL,
    MSG_NO_LENGTH,
    MSG_NOT_INCLUDED,
    MSG_NOT_INTEGER,
    MSG_NOT_NUMBER,
    MSG_ODD,
    MSG_TOO_LONG,
    MSG_TOO_SHORT,
    MSG_TYPE,
    MSG_URL,
    MSG_WRONG_LENGTH,
)
from ..exceptions import ConstraintDefinitionError
from ..helpers import interpolate

Validator = Callable[[Any], Any]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _option(options: Any, name: str, default: Any = None) -> Any:
    """Read an option by snake_case name, falling back to its camelCase alias."""
    if not isinstance(options, Mapping):
        return default
    if name in options:
        return options[name]
    return options.get(_camel(name), default)


def _message(options: Any, default: str, name: str = "message") -> str:
    custom = _option(options, name)
    return str(custom) if custom else default


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_empty(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return not value
    return False


def _require_string(value: Any) -> Any:
    if not isinstance(value, str):
        raise vol.Invalid("expected str")
    return value


TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "integer": _is_integer,
    "number": _is_number,
    "boolean": lambda value: isinstance(value, bool),
    "array": lambda value: isinstance(value, (list, tuple)),
    "object": lambda value: isinstance(value, Mapping),
    "date": lambda value: isinstance(value, (datetime.date, datetime.datetime)),
}

REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def build_presence(options: Any) -> Validator:
    """Reject None and, unless allow_empty is set, blank values.

    Descriptor:
        presence: true
        presence: {allow_empty: false}
    """
    allow_empty = bool(_option(options, "allow_empty", True))
    message = _message(options, MSG_BLANK)

    def presence(value: Any) -> Any:
        if value is None or (not allow_empty and _is_empty(value)):
            raise vol.Invalid(message)
        return value

    return presence


def build_type(options: Any) -> Validator:
    """Check the value type.

    Descriptor:
        type: string
        type: {type: integer, message: "must be a whole number"}
        type: int  (a Python type)
    """
    expected = options.get("type") if isinstance(options, Mapping) else options

    if isinstance(expected, type):
        type_name = expected.__name__

        def check(value: Any) -> bool:
            return isinstance(value, expected)

    elif isinstance(expected, str) and expected in TYPE_CHECKS:
        type_name = expected
        check = TYPE_CHECKS[expected]
    else:
        raise ConstraintDefinitionError(f"Unknown type: {expected!r}")

    message = _message(options, interpolate(MSG_TYPE, type=type_name))

    def type_check(value: Any) -> Any:
        if not check(value):
            raise vol.Invalid(message)
        return value

    return type_check


def _regex_flags(flags: Any) -> int:
    if isinstance(flags, int):
        return flags
    result = 0
    for flag in str(flags or ""):
        if flag not in REGEX_FLAGS:
            raise ConstraintDefinitionError(f"Unknown regex flag: {flag!r}")
        result |= REGEX_FLAGS[flag]
    return result


def build_format(options: Any) -> Validator:
    """Require the whole string value to match a pattern.

    Descriptor:
        format: "[a-z]+"
        format: {pattern: "[a-z]+", flags: i, message: "only letters"}
        format: re.compile("[a-z]+", re.I)
    """
    if isinstance(options, Mapping):
        pattern = options.get("pattern")
        flags = _regex_flags(options.get("flags"))
    else:
        pattern = options
        flags = 0

    if isinstance(pattern, re.Pattern):
        flags |= pattern.flags
        pattern = pattern.pattern
    if not isinstance(pattern, str):
        raise ConstraintDefinitionError(
            f"Format pattern must be a string, got {type(pattern).__name__}"
        )

    try:
        regex = re.compile(rf"(?:{pattern})\Z", flags)
    except re.error as err:
        raise ConstraintDefinitionError(
            f"Invalid format pattern {pattern!r}: {err}"
        ) from err

    # Match reports non-strings with its own message, Msg replaces it
    return vol.Msg(vol.Match(regex), _message(options, MSG_FORMAT))


def _bound(options: Any, name: str, kind: str) -> Any:
    """Read a numeric bound option, None when it is not set."""
    bound = _option(options, name)
    if bound is not None and not _is_number(bound):
        raise ConstraintDefinitionError(
            f"{kind.capitalize()} option '{name}' must be a number, "
            f"got {type(bound).__name__}"
        )
    return bound


def build_length(options: Any) -> Validator:
    """Check the length of a sized value.

    Every failing bound is reported, not just the first one.

    Descriptor:
        length: {minimum: 3, maximum: 20}
        length: {is: 5, wrong_length: "must have exactly 5 characters"}
    """
    if not isinstance(options, Mapping):
        raise ConstraintDefinitionError("Length options must be a mapping")

    minimum = _bound(options, "minimum", "length")
    maximum = _bound(options, "maximum", "length")
    exact = _bound(options, "is", "length")
    override = _option(options, "message")

    checks = []
    if exact is not None:
        wrong_length = _message(
            options, interpolate(MSG_WRONG_LENGTH, count=exact), "wrong_length"
        )
        checks.append(vol.Length(min=exact, max=exact, msg=override or wrong_length))
    if minimum is not None:
        too_short = _message(
            options, interpolate(MSG_TOO_SHORT, count=minimum), "too_short"
        )
        checks.append(vol.Length(min=minimum, msg=override or too_short))
    if maximum is not None:
        too_long = _message(options, interpolate(MSG_TOO_LONG, count=maximum), "too_long")
        checks.append(vol.Length(max=maximum, msg=override or too_long))

    def length(value: Any) -> Any:
        # Length reports unsized values with the bound's message
        try:
            len(value)
        except TypeError:
            raise vol.Invalid(override or MSG_NO_LENGTH) from None

        errors = []
        for check in checks:
            try:
                check(value)
            except vol.Invalid as err:
                errors.append(err)
        if errors:
            raise vol.MultipleInvalid(errors)
        return value

    return length


def _number(value: Any) -> Any:
    if not _is_number(value):
        raise vol.Invalid(MSG_NOT_NUMBER)
    return value


def _integer(value: Any) -> Any:
    if not _is_integer(value):
        raise vol.Invalid(MSG_NOT_INTEGER)
    return value


def _odd(value: Any) -> Any:
    if value % 2 != 1:
        raise vol.Invalid(MSG_ODD)
    return value


def _even(value: Any) -> Any:
    if value % 2 != 0:
        raise vol.Invalid(MSG_EVEN)
    return value


def build_numericality(options: Any) -> Validator:
    """Check that the value is a number, with optional bounds.

    Stops at the first failing check.

    Descriptor:
        numericality: true
        numericality: {only_integer: true, greater_than: 0, less_than_or_equal_to: 10}

    Raises:
        ConstraintDefinitionError: If a bound is not a number
    """
    checks: list[Any] = [_number]

    if _option(options, "only_integer"):
        checks.append(_integer)

    bound = _bound(options, "greater_than", "numericality")
    if bound is not None:
        checks.append(
            vol.Range(
                min=bound,
                min_included=False,
                msg=interpolate(MSG_GREATER_THAN, count=bound),
            )
        )
    bound = _bound(options, "greater_than_or_equal_to", "numericality")
    if bound is not None:
        checks.append(
            vol.Range(min=bound, msg=interpolate(MSG_GREATER_THAN_OR_EQUAL, count=bound))
        )
    bound = _bound(options, "equal_to", "numericality")
    if bound is not None:
        checks.append(
            vol.Range(min=bound, max=bound, msg=interpolate(MSG_EQUAL_TO, count=bound))
        )
    bound = _bound(options, "less_than_or_equal_to", "numericality")
    if bound is not None:
        checks.append(
            vol.Range(max=bound, msg=interpolate(MSG_LESS_THAN_OR_EQUAL, count=bound))
        )
    bound = _bound(options, "less_than", "numericality")
    if bound is not None:
        checks.append(
            vol.Range(
                max=bound,
                max_included=False,
                msg=interpolate(MSG_LESS_THAN, count=bound),
            )
        )

    if _option(options, "odd"):
        checks.append(_odd)
    if _option(options, "even"):
        checks.append(_even)

    return vol.All(*checks, msg=_option(options, "message"))


def _collection(options: Any, kind: str) -> Collection:
    within = options.get("within") if isinstance(options, Mapping) else options
    if isinstance(within, (str, bytes)) or not isinstance(within, Collection):
        raise ConstraintDefinitionError(
            f"{kind.capitalize()} options must be a collection, got {type(within).__name__}"
        )
    return within


def _contains(collection: Collection, value: Any) -> bool:
    try:
        return value in collection
    except TypeError:
        return False


def build_inclusion(options: Any) -> Validator:
    """Require the value to be one of a collection.

    Descriptor:
        inclusion: [small, medium, large]
        inclusion: {within: [small, medium, large], message: "^Unknown size {value}"}
    """
    within = _collection(options, "inclusion")
    message = _message(options, MSG_NOT_INCLUDED)
    member = vol.In(within, msg=message)

    def inclusion(value: Any) -> Any:
        try:
            return member(value)
        except vol.Invalid:
            raise vol.Invalid(interpolate(message, value=value)) from None

    return inclusion


def build_exclusion(options: Any) -> Validator:
    """Reject values that are part of a collection."""
    within = _collection(options, "exclusion")
    message = _message(options, MSG_EXCLUDED)
    non_member = vol.NotIn(within, msg=message)

    def exclusion(value: Any) -> Any:
        try:
            return non_member(value)
        except vol.Invalid:
            # NotIn also rejects values it cannot look up, such as lists
            if not _contains(within, value):
                return value
            raise vol.Invalid(interpolate(message, value=value)) from None

    return exclusion


def build_email(options: Any) -> Validator:
    return vol.All(_require_string, vol.Email(), msg=_message(options, MSG_EMAIL))


def build_url(options: Any) -> Validator:
    return vol.All(_require_string, vol.Url(), msg=_message(options, MSG_URL))


# Presence is handled apart by FieldConstraint since it is the only check
# that runs on missing values.
VALIDATOR_BUILDERS: dict[str, Callable[[Any], Validator]] = {
    "type": build_type,
    "format": build_format,
    "length": build_length,
    "numericality": build_numericality,
    "inclusion": build_inclusion,
    "exclusion": build_exclusion,
    "email": build_email,
    "url": build_url,
}
