"""
API Configuration Constants

Endpoints, paths and headers of the Parcel API (v1).
"""

from __future__ import annotations

from enum import Enum

from .cache import BASE_SECOND


class UserType(str, Enum):
    """Identity kind accepted by the player profile endpoint."""

    ROBLOX = "roblox"
    DISCORD = "discord"


class ParcelAPIConfig:
    """Parcel API specific configuration."""

    # Base endpoints (scheme is added by the transport)
    API_ENDPOINT = "api.parcelroblox.com/api"
    PAYMENTS_ENDPOINT = "payments.parcelroblox.com/external"
    URL_TEMPLATE = "https://{endpoint}/{path}"

    # Request paths
    HUB_INFO_PATH = "hub/getinfo"
    HUB_DESCRIPTION_PATH = "hub/description"
    HUB_TERMS_PATH = "hub/terms"
    HUB_PRODUCTS_PATH = "hub/getproducts"
    BESTSELLER_QUERY = "?option=bestseller"
    OWNED_PRODUCTS_PATH = "hub/user/getproducts/{user_id}"
    PLAYER_PROFILE_PATH = "user/check/{user_id}?option={user_type}"
    ORDER_COMPLETE_PATH = "hub/order/complete"

    # Headers
    CONTENT_TYPE = "application/json"
    AUTH_HEADER = "hub-secret-key"

    # Secret store entry holding the hub token
    SECRET_NAME = "ParcelToken"  # noqa: S105  # nosec B105 - Secret name, not a secret

    REQUEST_TIMEOUT = 30 * BASE_SECOND

    DEFAULT_METHOD = "GET"
