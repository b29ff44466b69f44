"""Normalized Parcel API record models."""

from .parcel_models import (
    HubDescription,
    HubInfo,
    HubProducts,
    HubTerms,
    Packables,
    PlayerProfile,
    Product,
    Stock,
)

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
