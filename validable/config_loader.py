"""Constraint table loader for YAML files.

File format:

    version: 1.0
    constraints:
      name:
        type: string
        presence: {allow_empty: false}
      code:
        format: {pattern: "[a-z]+", flags: i}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .const import CONFIG_MAJOR_VERSION
from .engine import ConstraintSet
from .exceptions import ConstraintDefinitionError

_LOGGER = logging.getLogger(__name__)


def load_constraints(path: str | Path) -> dict[str, Any]:
    """Load and check a constraint table from a YAML file.

    Args:
        path: Path of the YAML file

    Returns:
        Constraint table, usable as the constraints attribute of a
        Validable class

    Raises:
        FileNotFoundError: If the file does not exist
        ConstraintDefinitionError: If the file is not a valid constraint table
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Constraint file not found: {config_file}")

    constraints = parse_constraints(
        config_file.read_text(encoding="utf-8"), source=str(config_file)
    )
    _LOGGER.debug(
        "Loaded %d field constraints from %s", len(constraints), config_file
    )
    return constraints


def parse_constraints(text: str, source: str = "<string>") -> dict[str, Any]:
    """Parse and check a constraint table from YAML text.

    Args:
        text: YAML document
        source: Name of the document, used in error messages

    Raises:
        ConstraintDefinitionError: If the document is not a valid constraint table
    """
    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ConstraintDefinitionError(f"Invalid YAML in {source}: {err}") from err

    if not config:
        raise ConstraintDefinitionError(f"Constraint file {source} is empty")
    if not isinstance(config, dict):
        raise ConstraintDefinitionError(
            f"Constraint file {source} must contain a mapping, got {type(config).__name__}"
        )

    version = config.get("version")
    if version is not None and str(version).split(".")[0] != CONFIG_MAJOR_VERSION:
        raise ConstraintDefinitionError(
            f"Constraint file version {version} not supported "
            f"(expected {CONFIG_MAJOR_VERSION}.x)"
        )

    constraints = config.get("constraints")
    if not isinstance(constraints, dict):
        raise ConstraintDefinitionError(
            f"Constraint file {source} is missing a 'constraints' mapping"
        )

    _validate_descriptors(constraints, source)

    # Compile once so unknown validators and bad options surface at load time
    ConstraintSet(constraints)
    return constraints


def _validate_descriptors(constraints: dict[str, Any], source: str) -> None:
    """Check that each descriptor is a mapping (or empty).

    Raises:
        ConstraintDefinitionError: If a descriptor has the wrong shape
    """
    for field, descriptor in constraints.items():
        if not isinstance(field, str):
            raise ConstraintDefinitionError(
                f"{source}: field names must be strings, got {field!r}"
            )
        if descriptor is not None and not isinstance(descriptor, dict):
            raise ConstraintDefinitionError(
                f"{source}: constraints of field '{field}' must be a mapping, "
                f"got {type(descriptor).__name__}"
            )
