"""Dataclass serialization utilities for Parcelize.

Converts normalized records (and the lists/tuples/dicts that hold them)
into plain JSON-serializable structures for CLI output.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict[str, Any]:
    """Convert a dataclass instance to a dictionary.

    Nested dataclasses, lists and dicts are converted recursively.

    Args:
        obj: Dataclass instance to convert

    Returns:
        Dictionary representation of the dataclass

    Raises:
        TypeError: If obj is not a dataclass instance

    Example:
        >>> to_dict(HubInfo(total_sales=12, music_id=0))
        {'total_sales': 12, 'music_id': 0}
    """
    if not is_dataclass(obj) or isinstance(obj, type):
        error_msg = f"{type(obj).__name__} is not a dataclass"
        raise TypeError(error_msg)

    return {field.name: to_serializable(getattr(obj, field.name)) for field in fields(obj)}


def to_serializable(obj: Any) -> Any:
    """Recursively convert objects to JSON-serializable format.

    Args:
        obj: Object to convert

    Returns:
        JSON-serializable representation
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_dict(obj)

    if isinstance(obj, dict):
        return {str(key): to_serializable(value) for key, value in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [to_serializable(item) for item in obj]

    return str(obj)
