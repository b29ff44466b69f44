"""
Parcelize - Parcel API client

An open-source, maintained client for the Parcel API (v1): hub information,
products, player profiles and whitelisting, with per-resource response
caching.

Example:
    >>> from parcelize import create_client
    >>> client = create_client("eyJhbGciOiJIUzI1N...")
    >>> client.fetch_bestseller().product.name
    'Luxury BMW M Series'
"""

__version__ = "1.0.0"

from .services import ParcelClient, create_client
from .shared.constants import CacheCategory, UserType
from .shared.errors import ErrorCode, ParcelError
from .shared.models import (
    HubDescription,
    HubInfo,
    HubProducts,
    HubTerms,
    Packables,
    PlayerProfile,
    Product,
)

__all__ = [
    "CacheCategory",
    "ErrorCode",
    "HubDescription",
    "HubInfo",
    "HubProducts",
    "HubTerms",
    "Packables",
    "ParcelClient",
    "ParcelError",
    "PlayerProfile",
    "Product",
    "UserType",
    "create_client",
]
