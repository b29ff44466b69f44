"""
Parcelize Constants Module

Centralized constants for the Parcelize client: API endpoints and raw
field names, cache categories and durations, logging and CLI defaults.
"""

from .api import ParcelAPIConfig, UserType
from .api_fields import APIFields
from .cache import BASE_MINUTE, BASE_SECOND, CacheCategory, CacheConfig
from .cli import CLIDefaults, CLIMessages
from .logging import LogConfig

__all__ = [
    "APIFields",
    "BASE_MINUTE",
    "BASE_SECOND",
    "CLIDefaults",
    "CLIMessages",
    "CacheCategory",
    "CacheConfig",
    "LogConfig",
    "ParcelAPIConfig",
    "UserType",
]
