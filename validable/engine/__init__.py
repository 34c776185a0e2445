"""Constraint engine adapter.

Compiles constraint descriptors into voluptuous validators and shapes their
failures into validation error mappings.

Architecture:
- validators: one builder per descriptor option (type, format, length, ...)
- FieldConstraint: compiled descriptor of a single field
- ConstraintSet: compiled constraint table, whole-object and per-field checks
"""

from .constraint_set import ConstraintSet
from .field_constraint import FieldConstraint
from .validators import TYPE_CHECKS, VALIDATOR_BUILDERS

__all__ = [
    "ConstraintSet",
    "FieldConstraint",
    "TYPE_CHECKS",
    "VALIDATOR_BUILDERS",
]
