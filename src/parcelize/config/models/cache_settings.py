"""Cache configuration model.

Per-category time-to-live values. A negative value keeps entries forever.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from parcelize.shared.constants import CacheCategory, CacheConfig


class CacheSettings(BaseModel):
    """Cache durations in seconds per category."""

    hub_ttl: int = Field(
        default=CacheConfig.HUB_TTL,
        description="Hub info, description and terms (-1 caches forever)",
    )
    products_ttl: int = Field(
        default=CacheConfig.PRODUCTS_TTL,
        description="Product listings and bestseller",
    )
    players_ttl: int = Field(
        default=CacheConfig.PLAYERS_TTL,
        description="Player owned products and profiles",
    )

    def durations(self) -> dict[CacheCategory, int]:
        """Return the TTL of every cache category."""
        return {
            CacheCategory.HUB: self.hub_ttl,
            CacheCategory.PRODUCTS: self.products_ttl,
            CacheCategory.PLAYERS: self.players_ttl,
        }


__all__ = [
    "CacheSettings",
]
