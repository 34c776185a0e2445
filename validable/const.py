"""Constants for the Validable library."""

from typing import Final

# Key used for internal (non field-related) error results
INTERNAL_ERROR_KEY: Final = "_"

MSG_INVALID_FIELD: Final = "Invalid field"
MSG_FALSY_OBJECT: Final = "Cannot validate falsy object"
MSG_VALIDATION_FAILED: Final = "Validation failed"

# Messages with a leading caret are not prefixed with the field name
VERBATIM_PREFIX: Final = "^"

# Default engine messages
MSG_BLANK: Final = "can't be blank"
MSG_TYPE: Final = "must be of type {type}"
MSG_FORMAT: Final = "is invalid"
MSG_TOO_SHORT: Final = "is too short (minimum is {count} characters)"
MSG_TOO_LONG: Final = "is too long (maximum is {count} characters)"
MSG_WRONG_LENGTH: Final = "is the wrong length (should be {count} characters)"
MSG_NO_LENGTH: Final = "has an incorrect length"
MSG_NOT_NUMBER: Final = "is not a number"
MSG_NOT_INTEGER: Final = "must be an integer"
MSG_GREATER_THAN: Final = "must be greater than {count}"
MSG_GREATER_THAN_OR_EQUAL: Final = "must be greater than or equal to {count}"
MSG_EQUAL_TO: Final = "must be equal to {count}"
MSG_LESS_THAN_OR_EQUAL: Final = "must be less than or equal to {count}"
MSG_LESS_THAN: Final = "must be less than {count}"
MSG_ODD: Final = "must be odd"
MSG_EVEN: Final = "must be even"
MSG_NOT_INCLUDED: Final = "^{value} is not included in the list"
MSG_EXCLUDED: Final = "^{value} is restricted"
MSG_EMAIL: Final = "is not a valid email"
MSG_URL: Final = "is not a valid url"

# Field-set filter messages
MSG_NOT_ALLOWED: Final = "is not allowed"
MSG_FORBIDDEN: Final = "is forbidden"
MSG_REQUIRED: Final = "is required"

# Supported constraint table file format
CONFIG_MAJOR_VERSION: Final = "1"
