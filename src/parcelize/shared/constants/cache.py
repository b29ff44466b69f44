"""
Cache Configuration Constants

Cache categories and their default time-to-live values.
"""

from __future__ import annotations

from enum import Enum

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND


class CacheCategory(str, Enum):
    """Fixed cache categories, one per resource family."""

    HUB = "Hub"
    PRODUCTS = "Products"
    PLAYERS = "Players"


class CacheConfig:
    """Default cache durations in seconds."""

    # Negative TTL means the entry never expires
    NEVER_EXPIRES = -1

    HUB_TTL = NEVER_EXPIRES
    PRODUCTS_TTL = BASE_MINUTE
    PLAYERS_TTL = 5 * BASE_SECOND

    # Cache path keys
    HUB_INFO_KEY = "getinfo"
    HUB_DESCRIPTION_KEY = "description"
    HUB_TERMS_KEY = "terms"
    PRODUCTS_KEY = "products"
    BESTSELLER_KEY = "products.bestseller"
    OWNED_PRODUCTS_KEY = "ownedproducts.{user_id}"
    PROFILE_KEY = "profile.{user_type}.{user_id}"
