"""Parcel API Response Models.

Dataclasses for normalized Parcel API responses. Instances are produced by
``parcelize.services.normalizer`` and carry no identity beyond their field
values; a fresh fetch always builds new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from parcelize.shared.types.base import BaseDataclass

Number = Union[int, float]

# Boolean stock means "unlimited/available" flags, numbers are counts
Stock = Union[bool, int, float, None]


@dataclass
class Packables(BaseDataclass):
    """Delivery and pricing metadata attached to a product."""

    delivery: list[str] | None = None
    display_robux: bool | None = None
    is_usd_onsale: bool | None = None
    usd_price: Number | None = None
    stripe: dict[str, Any] | None = None


@dataclass
class Product(BaseDataclass):
    """A product sold on the hub.

    ``tags`` is an empty list when the API omits it, so it can always be
    iterated.
    """

    name: str | None = None
    description: str | None = None
    decal_id: Number | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    stock: Stock = None
    product_id: str | None = None
    developer_product_id: Number | None = None
    packables: Packables | None = None


@dataclass
class HubInfo(BaseDataclass):
    """Current hub information."""

    total_sales: Number | None = 0
    music_id: Number | None = 0


@dataclass
class HubDescription(BaseDataclass):
    """Long and short variations of the hub description."""

    long_description: str | None = None
    short_description: str | None = None


@dataclass
class HubTerms(BaseDataclass):
    """The hub's terms and conditions, if it has any."""

    terms: str | None = None


@dataclass
class HubProducts(BaseDataclass):
    """Products listing of a hub.

    A bestseller listing fills ``product`` and leaves ``products`` unset;
    a full listing fills ``products``.
    """

    hub_id: str | None = None
    products: list[Product] | None = None
    product: Product | None = None

    @property
    def is_bestseller(self) -> bool:
        """Whether this listing holds the bestseller only."""
        return self.products is None


@dataclass
class PlayerProfile(BaseDataclass):
    """Verification profile of a player."""

    discord_id: str | None = None
    is_verified: bool | None = None
    roblox_id: Number | None = 0
    discord_tag: str | None = None


__all__ = [
    "HubDescription",
    "HubInfo",
    "HubProducts",
    "HubTerms",
    "Packables",
    "PlayerProfile",
    "Product",
    "Stock",
]
