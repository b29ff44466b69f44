"""Shared utilities for Parcelize."""

from .dataclass_serialization import to_dict, to_serializable

__all__ = ["to_dict", "to_serializable"]
