"""Helpers shared by the repositories."""

from enum import Enum
from typing import Any, Iterable, Mapping


def column_value(value: Any) -> Any:
    """Convert enum members to their stored string value."""
    if isinstance(value, Enum):
        return value.value
    return value


def apply_fields(instance: Any, data: Mapping[str, Any], allowed: Iterable[str]) -> list[str]:
    """Copy whitelisted fields from data onto an ORM instance.

    Keys outside the whitelist are ignored.

    Args:
        instance: ORM instance to modify
        data: Field values to apply
        allowed: Field names that may be written

    Returns:
        Names of the fields that were applied
    """
    applied = []
    for field in allowed:
        if field in data:
            setattr(instance, field, column_value(data[field]))
            applied.append(field)
    return applied
