"""Normalization of raw Parcel API payloads.

Pure functions that map the API's mixed snake_case/camelCase JSON into the
records of ``parcelize.shared.models``. Numbers that may arrive as strings
are coerced, absent optional fields get their defaults, and a missing
input object yields ``None`` rather than an empty record.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Union

from parcelize.shared.constants import APIFields
from parcelize.shared.models import (
    HubDescription,
    HubInfo,
    HubProducts,
    HubTerms,
    Packables,
    PlayerProfile,
    Product,
    Stock,
)

Number = Union[int, float]


def to_number(value: Any) -> Number | None:
    """Coerce ``value`` to a number.

    Numbers pass through, numeric strings are parsed (integers stay
    integers), anything else, booleans included, becomes ``None``.

    Example:
        >>> to_number("5"), to_number("2.50"), to_number(True), to_number("abc")
        (5, 2.5, None, None)
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _details(raw: Any) -> Mapping[str, Any] | None:
    if not isinstance(raw, Mapping):
        return None
    details = raw.get(APIFields.DETAILS)
    return details if isinstance(details, Mapping) else None


def _items(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def format_packables(raw: Any) -> Packables | None:
    """Normalize a raw ``packables`` object."""
    if not isinstance(raw, Mapping):
        return None

    delivery = raw.get(APIFields.DELIVERY)
    stripe = raw.get(APIFields.STRIPE)
    return Packables(
        delivery=list(delivery) if isinstance(delivery, (list, tuple)) else None,
        display_robux=raw.get(APIFields.DISPLAY_ROBUX),
        is_usd_onsale=raw.get(APIFields.ONSALE_USD),
        usd_price=to_number(raw.get(APIFields.PRICE_IN_USD)),
        stripe=dict(stripe) if isinstance(stripe, Mapping) else None,
    )


def format_stock(value: Any) -> Stock:
    """Booleans stay flags, everything else is coerced to a count."""
    if isinstance(value, bool):
        return value
    return to_number(value)


def format_product(raw: Any) -> Product | None:
    """Normalize a raw product object."""
    if not isinstance(raw, Mapping):
        return None

    product_id = raw.get(APIFields.PRODUCT_ID)
    tags = raw.get(APIFields.TAGS)
    return Product(
        # generic details
        name=raw.get(APIFields.NAME),
        description=raw.get(APIFields.DESCRIPTION),
        decal_id=to_number(raw.get(APIFields.DECAL_ID)),
        # tags
        category=raw.get(APIFields.CATEGORY),
        tags=[str(tag) for tag in tags] if isinstance(tags, (list, tuple)) else [],
        # pricing
        stock=format_stock(raw.get(APIFields.STOCK)),
        product_id=str(product_id) if product_id is not None else None,
        developer_product_id=to_number(raw.get(APIFields.DEVPRODUCT_ID)),
        packables=format_packables(raw.get(APIFields.PACKABLES)),
    )


def format_products(raw: Any) -> list[Product]:
    """Normalize a list (or id-keyed mapping) of raw products.

    Entries that are not objects are dropped.
    """
    products = (format_product(item) for item in _items(raw))
    return [product for product in products if product is not None]


def format_hub_info(raw: Any) -> HubInfo | None:
    """Normalize the ``hub/getinfo`` body. Its fields are top level."""
    if not isinstance(raw, Mapping):
        return None

    return HubInfo(
        total_sales=to_number(_or_default(raw.get(APIFields.TOTAL_SALES), "0")),
        music_id=to_number(_or_default(raw.get(APIFields.MUSIC_ID), "0")),
    )


def format_hub_description(raw: Any) -> HubDescription | None:
    """Normalize the ``hub/description`` body."""
    details = _details(raw)
    if details is None:
        return None

    return HubDescription(
        long_description=details.get(APIFields.LONG_DESCRIPTION),
        short_description=details.get(APIFields.SHORT_DESCRIPTION),
    )


def format_hub_terms(raw: Any) -> HubTerms | None:
    """Normalize the ``hub/terms`` body."""
    details = _details(raw)
    if details is None:
        return None

    return HubTerms(terms=details.get(APIFields.TERMS))


def format_hub_products(raw: Any, *, bestseller: bool = False) -> HubProducts | None:
    """Normalize the ``hub/getproducts`` body.

    Args:
        raw: Response body.
        bestseller: The body answers ``?option=bestseller`` and holds a
            single ``product`` instead of a ``products`` list.
    """
    details = _details(raw)
    if details is None:
        return None

    hub_id = details.get(APIFields.HUB_ID)
    if bestseller:
        return HubProducts(
            hub_id=hub_id,
            product=format_product(details.get(APIFields.PRODUCT)),
        )

    return HubProducts(
        hub_id=hub_id,
        products=format_products(details.get(APIFields.PRODUCTS)),
    )


def format_owned_products(raw: Any) -> list[Product] | None:
    """Normalize the ``hub/user/getproducts/{id}`` body."""
    details = _details(raw)
    if details is None:
        return None

    return format_products(details.get(APIFields.OWNED_PRODUCTS))


def format_player_profile(raw: Any) -> PlayerProfile | None:
    """Normalize the ``user/check/{id}`` body."""
    details = _details(raw)
    if details is None:
        return None

    discord_id = details.get(APIFields.DISCORD_ID)
    return PlayerProfile(
        discord_id=str(discord_id) if discord_id is not None else None,
        is_verified=details.get(APIFields.VERIFIED),
        roblox_id=to_number(_or_default(details.get(APIFields.ROBLOX_ID), "0")),
        discord_tag=details.get(APIFields.DISCORD_TAG),
    )


__all__ = [
    "format_hub_description",
    "format_hub_info",
    "format_hub_products",
    "format_hub_terms",
    "format_owned_products",
    "format_packables",
    "format_player_profile",
    "format_product",
    "format_products",
    "format_stock",
    "to_number",
]
