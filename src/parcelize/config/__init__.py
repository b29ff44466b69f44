"""Parcelize Configuration Module

- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, App, Cache and Logging settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import (
    APISettings,
    AppSettings,
    CacheSettings,
    LoggingSettings,
    ParcelSettings,
    Runtime,
)
from .models.settings import Settings

__all__ = [
    "APISettings",
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "ParcelSettings",
    "Runtime",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
