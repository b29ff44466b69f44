"""Parcel API services: cache, normalizer, transport, host and client."""

from . import normalizer
from .cache import CacheEntry, ResponseCache
from .host import HostEnvironment, SettingsHost, secret_env_var
from .transport import ParcelTransport, TransportResponse
from .parcel_client import ParcelClient, create_client

__all__ = [
    "CacheEntry",
    "HostEnvironment",
    "ParcelClient",
    "ParcelTransport",
    "ResponseCache",
    "SettingsHost",
    "TransportResponse",
    "create_client",
    "normalizer",
    "secret_env_var",
]
