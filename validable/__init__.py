"""Validable - field validation for data entities.

This package provides:
- Validable: base class giving an entity type validate(), validate_field()
  and validate_object() backed by a per-class constraint table
- mixin(): attach the Validable capability to an arbitrary base class
- whitelist / blacklist / requirelist: field-set filters
- merge(): combine validation error mappings
- load_constraints(): read constraint tables from YAML files

Constraint descriptors are checked with voluptuous.
"""

from .config_loader import load_constraints, parse_constraints
from .engine import ConstraintSet, FieldConstraint
from .exceptions import ConstraintDefinitionError, ContractError, ValidationError
from .filters import FilterMode, blacklist, filter_fields, requirelist, whitelist
from .helpers import ValidationErrors
from .merge import merge
from .validable import Validable, mixin

__version__ = "1.0.0"

__all__ = [
    # Capability
    "Validable",
    "mixin",
    # Engine
    "ConstraintSet",
    "FieldConstraint",
    "ValidationErrors",
    # Filters
    "FilterMode",
    "filter_fields",
    "whitelist",
    "blacklist",
    "requirelist",
    # Merge
    "merge",
    # Configuration
    "load_constraints",
    "parse_constraints",
    # Errors
    "ContractError",
    "ConstraintDefinitionError",
    "ValidationError",
]
