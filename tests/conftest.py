"""Pytest configuration and fixtures for Validable tests."""

from __future__ import annotations

import re
import sys
from pathlib import Path

# Add parent directory to Python path so we can import validable
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from validable import Validable


class Mock(Validable):
    """Entity with two optional and two required fields."""

    constraints = {
        "str": {"type": "string", "format": re.compile(r"[a-z]+", re.IGNORECASE)},
        "num": {"type": "integer"},
        "req1": {"type": "string", "presence": {"allow_empty": False}},
        "req2": {"type": "string", "presence": {"allow_empty": False}},
    }

    def __init__(self, **fields):
        self.__dict__.update(fields)


@pytest.fixture
def mock_class() -> type[Mock]:
    """Return the Mock entity class."""
    return Mock


@pytest.fixture
def valid_fields() -> dict:
    """Return field values satisfying every Mock constraint."""
    return {"str": "abc", "num": 123, "req1": "def", "req2": "ghi"}


@pytest.fixture
def mocky(valid_fields) -> Mock:
    """Return a valid Mock instance."""
    return Mock(**valid_fields)


@pytest.fixture
def constraints_yaml() -> str:
    """Return a YAML constraint table equivalent to the Mock one."""
    return """
version: 1.0
constraints:
  str:
    type: string
    format:
      pattern: "[a-z]+"
      flags: i
  num:
    type: integer
  req1:
    type: string
    presence:
      allowEmpty: false
  req2:
    type: string
    presence:
      allow_empty: false
"""
