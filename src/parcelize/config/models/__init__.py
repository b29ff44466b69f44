"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings, ParcelSettings
from .app_settings import AppSettings, LoggingSettings, Runtime
from .cache_settings import CacheSettings

__all__ = [
    "APISettings",
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "ParcelSettings",
    "Runtime",
]
