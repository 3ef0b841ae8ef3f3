"""Common utility functions for schemas."""
from __future__ import annotations

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

# Request and response bodies use camelCase keys; Python code keeps snake_case.
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def coerce_to_str(value: object) -> object:
    """Accept numbers where a string is expected (clients often send phones as ints)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value)) if isinstance(value, float) and value.is_integer() else str(value)
    return value


def blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value
