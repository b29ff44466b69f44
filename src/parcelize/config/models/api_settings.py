"""API configuration models.

Connection settings for the Parcel API: endpoints, auth token and the
name of the host secret that holds the token.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from parcelize.shared.constants import ParcelAPIConfig


class ParcelSettings(BaseModel):
    """Parcel API configuration.

    Security: auth_token is masked in __repr__ to prevent accidental
    exposure in logs.
    """

    # API authentication (sensitive - hidden from repr)
    auth_token: str = Field(
        default="",
        repr=False,
        description="Hub secret key, used when none is passed to the client",
    )
    secret_name: str = Field(
        default=ParcelAPIConfig.SECRET_NAME,
        description="Host secret store entry holding the hub secret key",
    )

    api_endpoint: str = Field(
        default=ParcelAPIConfig.API_ENDPOINT,
        description="Host and base path of the hub API",
    )
    payments_endpoint: str = Field(
        default=ParcelAPIConfig.PAYMENTS_ENDPOINT,
        description="Host and base path of the payments API",
    )

    timeout: float = Field(
        default=ParcelAPIConfig.REQUEST_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    def __repr__(self) -> str:
        """Custom repr that masks the auth token."""
        masked_token = "****" if self.auth_token else "[empty]"
        return (
            f"ParcelSettings("
            f"auth_token={masked_token}, "
            f"secret_name={self.secret_name!r}, "
            f"api_endpoint={self.api_endpoint!r}, "
            f"payments_endpoint={self.payments_endpoint!r}, "
            f"timeout={self.timeout})"
        )


class APISettings(BaseModel):
    """API configuration container."""

    parcel: ParcelSettings = Field(
        default_factory=ParcelSettings,
        description="Parcel API configuration",
    )


__all__ = [
    "APISettings",
    "ParcelSettings",
]
