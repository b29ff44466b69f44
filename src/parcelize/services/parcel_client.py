"""Parcel API client.

``ParcelClient`` wraps the Parcel API (v1): hub information, products,
player profiles and whitelisting. Reads go through an in-memory cache with
one expiry policy per resource family:

- Hub (info, description, terms): cached for the lifetime of the client
- Products (listing, bestseller): refreshed after 60 seconds
- Players (owned products, profiles): refreshed after 5 seconds

Failed requests never raise from the fetch methods. They are logged as
warnings, return ``None`` and leave the cache untouched.

Example:
    >>> client = create_client("eyJhbGciOiJIUzI1N...")
    >>> client.fetch_hub_info().total_sales
    1520
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from parcelize.config.loader import get_config
from parcelize.config.models.settings import Settings
from parcelize.services import normalizer
from parcelize.services.cache import Clock, ResponseCache
from parcelize.services.host import HostEnvironment, SettingsHost
from parcelize.services.transport import ParcelTransport
from parcelize.shared.constants import (
    APIFields,
    CacheCategory,
    CacheConfig,
    LogConfig,
    ParcelAPIConfig,
    UserType,
)
from parcelize.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    ParcelParsingError,
    SecurityError,
    create_validation_error,
)
from parcelize.shared.logging import log_operation_error, log_operation_success
from parcelize.shared.models import (
    HubDescription,
    HubInfo,
    HubProducts,
    HubTerms,
    PlayerProfile,
    Product,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _whole_number(value: Any) -> int | None:
    """Integer value of ``value``, None unless it is a finite whole number."""
    number = normalizer.to_number(value)
    if isinstance(number, float):
        return int(number) if number.is_integer() else None
    return number


class ParcelClient:
    """Client for one hub, authenticated by its hub secret key.

    Construction fails fast: without a token, outside the server, or with
    HTTP disabled it raises, and it performs one eager ``hub/getinfo`` call
    to verify the token (priming the Hub cache on the way).

    Args:
        auth_token: Hub secret key. When omitted it is read from the host
            secret store entry named by ``api.parcel.secret_name``.
        force_debugging: Force debug tracing on or off. When not a bool,
            tracing follows whether the host runs in the studio.
        settings: Settings to use, the global settings by default.
        host: Host environment, built from settings by default.
        transport: Transport to use, a ``ParcelTransport`` by default.
        clock: Time source for cache expiry, ``time.time`` by default.

    Raises:
        SecurityError: No auth token was given or found.
        ApplicationError: The host is not the server or HTTP is disabled.
        InfrastructureError: The eager hub check failed.
    """

    def __init__(
        self,
        auth_token: str | None = None,
        force_debugging: bool | None = None,
        *,
        settings: Settings | None = None,
        host: HostEnvironment | None = None,
        transport: ParcelTransport | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings or get_config()
        host = host or SettingsHost(self.settings)
        parcel_settings = self.settings.api.parcel

        token = auth_token or host.get_secret(parcel_settings.secret_name)
        if not token:
            raise SecurityError(
                code=ErrorCode.MISSING_AUTH_TOKEN,
                message=(
                    "Cannot initialise a new client: no auth token provided "
                    f"and none found as secret {parcel_settings.secret_name!r}"
                ),
                context=ErrorContext(operation="initialize_client"),
            )

        if not host.is_server():
            raise ApplicationError(
                code=ErrorCode.INVALID_EXECUTION_CONTEXT,
                message="Cannot initialise a new client: current environment is not the server",
                context=ErrorContext(operation="initialize_client"),
            )

        self.debugging = force_debugging if isinstance(force_debugging, bool) else host.is_studio()
        self.cache = ResponseCache(self.settings.cache.durations(), clock=clock)
        self._transport = transport or ParcelTransport(
            auth_token=token,
            api_endpoint=parcel_settings.api_endpoint,
            payments_endpoint=parcel_settings.payments_endpoint,
            timeout=parcel_settings.timeout,
        )

        try:
            self._integrity_check(host)
        except Exception:
            self._transport.close()
            raise

    # Internal

    def _debug(self, message: str, *args: Any) -> None:
        if not self.debugging:
            return
        logger.debug("%s " + message, LogConfig.DEBUG_PREFIX, *args)

    def _integrity_check(self, host: HostEnvironment) -> None:
        context = ErrorContext(operation="integrity_check")

        if not host.http_enabled():
            raise ApplicationError(
                code=ErrorCode.HTTP_DISABLED,
                message="HTTP requests are not enabled",
                context=context,
            )

        if self.fetch_hub_info() is None:
            error = InfrastructureError(
                code=ErrorCode.CLIENT_INITIALIZATION_FAILED,
                message="Failed to initialise a new client: hub info could not be fetched",
                context=context,
            )
            log_operation_error(logger, error)
            raise error

        log_operation_success(logger, operation="integrity_check", duration_ms=0)

    def _fetch(
        self,
        category: CacheCategory,
        cache_path: str,
        request_path: str,
        normalize: Callable[[Any], T | None],
    ) -> T | None:
        """Cache check, request, normalize and cache write for one read."""
        if self.cache.should_return_cached(category, cache_path):
            self._debug("Returning cached response for %s/%s", category.value, cache_path)
            return self.cache.get(category, cache_path)

        self._debug("Requesting fresh response for %s/%s", category.value, cache_path)
        response = self._transport.request(request_path)
        if not response.ok or not response.parsed:
            return None

        formatted = normalize(response.body)
        if formatted is None:
            error = ParcelParsingError(
                code=ErrorCode.API_INVALID_RESPONSE,
                message=f"{LogConfig.DEBUG_PREFIX} Unexpected response shape for {request_path}",
                context=ErrorContext(operation="fetch", path=request_path),
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return None

        self.cache.set(category, cache_path, formatted)
        return formatted

    # External

    def fetch_hub_info(self) -> HubInfo | None:
        """Fetch the hub's total sales and the music it plays."""
        return self._fetch(
            CacheCategory.HUB,
            CacheConfig.HUB_INFO_KEY,
            ParcelAPIConfig.HUB_INFO_PATH,
            normalizer.format_hub_info,
        )

    def fetch_hub_description(self) -> HubDescription | None:
        """Fetch the long and short variations of the hub description."""
        return self._fetch(
            CacheCategory.HUB,
            CacheConfig.HUB_DESCRIPTION_KEY,
            ParcelAPIConfig.HUB_DESCRIPTION_PATH,
            normalizer.format_hub_description,
        )

    def fetch_hub_terms(self) -> HubTerms | None:
        """Fetch the hub's terms and conditions, if it has any."""
        return self._fetch(
            CacheCategory.HUB,
            CacheConfig.HUB_TERMS_KEY,
            ParcelAPIConfig.HUB_TERMS_PATH,
            normalizer.format_hub_terms,
        )

    def fetch_bestseller(self) -> HubProducts | None:
        """Fetch the hub's current bestseller. Same as ``fetch_products(True)``."""
        return self.fetch_products(get_bestseller=True)

    def fetch_products(self, get_bestseller: bool = False) -> HubProducts | None:
        """Fetch every product on the hub, or only the bestseller.

        Args:
            get_bestseller: Fetch the bestseller instead of the full listing.
        """
        get_bestseller = bool(get_bestseller)
        cache_path = CacheConfig.BESTSELLER_KEY if get_bestseller else CacheConfig.PRODUCTS_KEY
        request_path = ParcelAPIConfig.HUB_PRODUCTS_PATH
        if get_bestseller:
            request_path += ParcelAPIConfig.BESTSELLER_QUERY

        return self._fetch(
            CacheCategory.PRODUCTS,
            cache_path,
            request_path,
            lambda body: normalizer.format_hub_products(body, bestseller=get_bestseller),
        )

    def fetch_player_owned_products(self, user_id: int) -> list[Product] | None:
        """Fetch the products a player owns on the hub.

        Args:
            user_id: The player's Roblox user id.

        Raises:
            DomainError: If user_id is not an integer.
        """
        if not _is_integer(user_id):
            raise create_validation_error(
                f"Invalid user_id provided! Expected <int>, got <{type(user_id).__name__}>",
                field="user_id",
                operation="fetch_player_owned_products",
            )

        return self._fetch(
            CacheCategory.PLAYERS,
            CacheConfig.OWNED_PRODUCTS_KEY.format(user_id=user_id),
            ParcelAPIConfig.OWNED_PRODUCTS_PATH.format(user_id=user_id),
            normalizer.format_owned_products,
        )

    def fetch_player_profile(
        self,
        user_id: int | str,
        user_type: UserType | str = UserType.ROBLOX,
    ) -> PlayerProfile | None:
        """Fetch a player's verification profile.

        Args:
            user_id: Roblox user id, or Discord id for ``UserType.DISCORD``.
            user_type: Which kind of id ``user_id`` is.

        Raises:
            DomainError: If user_id or user_type is invalid.
        """
        try:
            resolved_type = UserType(user_type)
        except ValueError as e:
            raise create_validation_error(
                f"Invalid user_type provided! Expected one of "
                f"{[member.value for member in UserType]}, got {user_type!r}",
                field="user_type",
                operation="fetch_player_profile",
                original_error=e,
            ) from e

        valid_id = _is_integer(user_id) or (
            resolved_type is UserType.DISCORD and isinstance(user_id, str) and user_id.isdigit()
        )
        if not valid_id:
            raise create_validation_error(
                f"Invalid user_id provided! Expected <int>, got <{type(user_id).__name__}>",
                field="user_id",
                operation="fetch_player_profile",
            )

        return self._fetch(
            CacheCategory.PLAYERS,
            CacheConfig.PROFILE_KEY.format(user_type=resolved_type.value, user_id=user_id),
            ParcelAPIConfig.PLAYER_PROFILE_PATH.format(
                user_id=user_id,
                user_type=resolved_type.value,
            ),
            normalizer.format_player_profile,
        )

    def whitelist(self, user_id: int | str, product_id: str | int) -> tuple[bool, Any]:
        """Whitelist a player for a product. Never cached.

        Args:
            user_id: The player's Roblox user id.
            product_id: The Parcel product id.

        Returns:
            ``(success, body)``: whether the request succeeded, and the
            decoded response (usually ``{"message": ..., "status": ...}``),
            the raw status message when the body was not JSON, or an
            error object when no response arrived.

        Raises:
            DomainError: If user_id or product_id is missing or invalid.
        """
        roblox_id = _whole_number(user_id)
        if roblox_id is None or product_id is None or product_id == "":
            raise create_validation_error(
                f"Invalid parameters passed while attempting to whitelist {user_id!r}!",
                field="user_id" if roblox_id is None else "product_id",
                operation="whitelist",
            )

        response = self._transport.request(
            ParcelAPIConfig.ORDER_COMPLETE_PATH,
            "POST",
            {
                APIFields.ROBLOX_ID: roblox_id,
                APIFields.PRODUCT_ID: str(product_id),
            },
            is_payments_related=True,
        )

        if response.ok:
            self._debug("Whitelisted %s for product %s", user_id, product_id)
        else:
            logger.warning(
                "%s Failed to whitelist %s for product %s: %s",
                LogConfig.DEBUG_PREFIX,
                user_id,
                product_id,
                response.status_message,
            )
        return response.ok, response.body

    def close(self) -> None:
        """Release the transport's HTTP session."""
        self._transport.close()

    def __enter__(self) -> ParcelClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_client(
    auth_token: str | None = None,
    force_debugging: bool | None = None,
    **kwargs: Any,
) -> ParcelClient:
    """Initialise a new client from a token, or from the host secret store.

    Keyword arguments are passed through to ``ParcelClient``.
    """
    return ParcelClient(auth_token, force_debugging, **kwargs)


__all__ = [
    "ParcelClient",
    "create_client",
]
