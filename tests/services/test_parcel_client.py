"""Tests for ParcelClient construction, caching and operations."""

import logging

import pytest

from parcelize import create_client
from parcelize.services.parcel_client import ParcelClient
from parcelize.services.transport import TransportResponse
from parcelize.shared.constants import CacheCategory, UserType
from parcelize.shared.errors import (
    ApplicationError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    SecurityError,
)
from parcelize.shared.models import HubInfo

PRODUCTS_PATH = "hub/getproducts"
BESTSELLER_PATH = "hub/getproducts?option=bestseller"


class TestClientConstruction:
    """Fail-fast construction checks."""

    def test_successful_construction_primes_hub_cache(self, client, transport):
        """Construction performs one hub/getinfo request and caches it."""
        assert transport.calls_to("hub/getinfo") == 1
        assert client.cache.get(CacheCategory.HUB, "getinfo") == HubInfo(
            total_sales=1520,
            music_id=1837070127,
        )

    def test_missing_token_raises(self, make_client, transport):
        with pytest.raises(SecurityError) as exc_info:
            make_client(auth_token=None)

        assert exc_info.value.code == ErrorCode.MISSING_AUTH_TOKEN
        assert transport.requests == []

    def test_empty_token_raises(self, make_client):
        with pytest.raises(SecurityError):
            make_client(auth_token="")

    def test_token_from_host_secret(self, make_client, host, transport):
        """Without an explicit token the host secret store is used."""
        host.secrets["ParcelToken"] = "stored-token"

        client = make_client(auth_token=None, host=host)

        assert isinstance(client, ParcelClient)
        assert transport.calls_to("hub/getinfo") == 1

    def test_not_server_raises(self, make_client, host, transport):
        host.server = False

        with pytest.raises(ApplicationError) as exc_info:
            make_client(host=host)

        assert exc_info.value.code == ErrorCode.INVALID_EXECUTION_CONTEXT
        assert transport.requests == []

    def test_http_disabled_raises(self, make_client, host, transport):
        host.http = False

        with pytest.raises(ApplicationError) as exc_info:
            make_client(host=host)

        assert exc_info.value.code == ErrorCode.HTTP_DISABLED
        assert transport.requests == []
        assert transport.closed is True

    def test_failed_hub_check_raises(self, make_client, transport):
        """A token the API rejects fails construction."""
        transport.respond("hub/getinfo", {"message": "Unauthorized"}, ok=False, status_code=401)

        with pytest.raises(InfrastructureError) as exc_info:
            make_client()

        assert exc_info.value.code == ErrorCode.CLIENT_INITIALIZATION_FAILED
        assert transport.closed is True

    def test_unreachable_api_raises(self, make_client, transport):
        transport.fail("hub/getinfo")

        with pytest.raises(InfrastructureError):
            make_client()

    def test_unexpected_error_closes_transport(self, make_client, transport, mocker):
        """The session is released whatever the hub check raises."""
        mocker.patch.object(transport, "request", side_effect=RuntimeError("adapter crashed"))

        with pytest.raises(RuntimeError):
            make_client()

        assert transport.closed is True

    def test_create_client_passes_options(self, settings, host, transport, clock):
        client = create_client(
            "test-token",
            True,
            settings=settings,
            host=host,
            transport=transport,
            clock=clock,
        )

        assert client.debugging is True


class TestDebugging:
    @pytest.mark.parametrize(
        ("force_debugging", "studio", "expected"),
        [
            (True, False, True),
            (False, True, False),
            (None, True, True),
            (None, False, False),
        ],
    )
    def test_debugging_flag(self, make_client, host, force_debugging, studio, expected):
        """A bool forces tracing, anything else follows the studio flag."""
        host.studio = studio

        client = make_client(force_debugging=force_debugging, host=host)

        assert client.debugging is expected

    def test_debug_trace_uses_prefix(self, make_client, transport, caplog):
        client = make_client(force_debugging=True)

        with caplog.at_level(logging.DEBUG, logger="parcelize"):
            client.fetch_hub_info()

        assert any(record.getMessage().startswith("[ParcelAPI]:") for record in caplog.records)

    def test_no_trace_when_not_debugging(self, make_client, caplog):
        client = make_client(force_debugging=False)

        with caplog.at_level(logging.DEBUG, logger="parcelize.services.parcel_client"):
            client.fetch_hub_info()

        assert not any(
            record.getMessage().startswith("[ParcelAPI]: Returning cached")
            for record in caplog.records
        )


class TestCachedReads:
    """Cache behaviour of the fetch operations."""

    def test_hub_info_served_from_cache(self, client, transport, clock):
        """Hub entries never expire."""
        clock.advance(24 * 3600)

        info = client.fetch_hub_info()

        assert info == HubInfo(total_sales=1520, music_id=1837070127)
        assert transport.calls_to("hub/getinfo") == 1

    def test_products_cached_within_ttl(self, client, transport, clock, products_body):
        transport.respond(PRODUCTS_PATH, products_body)

        first = client.fetch_products()
        clock.advance(59)
        second = client.fetch_products()

        assert second == first
        assert transport.calls_to(PRODUCTS_PATH) == 1

    def test_products_refreshed_after_ttl(self, client, transport, clock, products_body):
        transport.respond(PRODUCTS_PATH, products_body)
        client.fetch_products()

        clock.advance(61)
        client.fetch_products()

        assert transport.calls_to(PRODUCTS_PATH) == 2

    def test_players_refreshed_after_five_seconds(self, client, transport, clock, profile_body):
        path = "user/check/110029109?option=roblox"
        transport.respond(path, profile_body)

        client.fetch_player_profile(110029109)
        clock.advance(4)
        client.fetch_player_profile(110029109)
        clock.advance(2)
        client.fetch_player_profile(110029109)

        assert transport.calls_to(path) == 2

    def test_failed_refresh_keeps_stale_entry(self, client, transport, clock, products_body):
        """A failed request returns None and leaves the cache untouched."""
        # Given
        transport.respond(PRODUCTS_PATH, products_body)
        cached = client.fetch_products()
        clock.advance(61)
        transport.fail(PRODUCTS_PATH)

        # When
        result = client.fetch_products()

        # Then
        assert result is None
        assert client.cache.get(CacheCategory.PRODUCTS, "products") == cached

    def test_non_json_success_keeps_stale_entry(self, client, transport, clock, products_body):
        """A 2xx reply without a JSON body returns None and keeps the cache."""
        # Given
        transport.respond(PRODUCTS_PATH, products_body)
        cached = client.fetch_products()
        clock.advance(61)
        transport.routes[PRODUCTS_PATH] = TransportResponse(
            ok=True,
            body="OK",
            status_code=200,
            status_message="OK",
            parsed=False,
        )

        # When
        result = client.fetch_products()

        # Then
        assert result is None
        assert transport.calls_to(PRODUCTS_PATH) == 2
        assert client.cache.get(CacheCategory.PRODUCTS, "products") == cached

    def test_error_status_is_not_cached(self, client, transport):
        transport.respond(PRODUCTS_PATH, {"message": "Forbidden"}, ok=False, status_code=403)

        assert client.fetch_products() is None
        assert client.cache.get(CacheCategory.PRODUCTS, "products") is None

    def test_unexpected_shape_is_not_cached(self, client, transport, caplog):
        transport.respond("hub/terms", {"message": "ok"})

        with caplog.at_level(logging.WARNING, logger="parcelize"):
            assert client.fetch_hub_terms() is None

        assert client.cache.get(CacheCategory.HUB, "terms") is None
        assert any(record.levelno == logging.WARNING for record in caplog.records)


class TestHubOperations:
    def test_fetch_hub_description(self, client, transport):
        transport.respond(
            "hub/description",
            {"details": {"long_description": "Long", "short_description": "Short"}},
        )

        description = client.fetch_hub_description()

        assert description is not None
        assert description.long_description == "Long"
        assert client.cache.get(CacheCategory.HUB, "description") == description

    def test_fetch_hub_terms(self, client, transport):
        transport.respond("hub/terms", {"details": {"terms": "No refunds"}})

        terms = client.fetch_hub_terms()

        assert terms is not None
        assert terms.terms == "No refunds"


class TestProductOperations:
    def test_fetch_products(self, client, transport, products_body):
        transport.respond(PRODUCTS_PATH, products_body)

        listing = client.fetch_products()

        assert listing is not None
        assert listing.hub_id == "hub_42"
        assert len(listing.products) == 2

    def test_bestseller_matches_fetch_products_true(self, client, transport, bestseller_body):
        """fetch_bestseller is fetch_products(True): same request, same cache entry."""
        # Given
        transport.respond(BESTSELLER_PATH, bestseller_body)

        # When
        via_bestseller = client.fetch_bestseller()
        via_products = client.fetch_products(True)

        # Then
        assert via_bestseller == via_products
        assert via_bestseller.product.product_id == "prod_abc123"
        assert transport.calls_to(BESTSELLER_PATH) == 1
        assert client.cache.get(CacheCategory.PRODUCTS, "products.bestseller") == via_bestseller

    def test_bestseller_and_listing_cached_separately(
        self,
        client,
        transport,
        products_body,
        bestseller_body,
    ):
        transport.respond(PRODUCTS_PATH, products_body)
        transport.respond(BESTSELLER_PATH, bestseller_body)

        listing = client.fetch_products()
        bestseller = client.fetch_bestseller()

        assert listing.is_bestseller is False
        assert bestseller.is_bestseller is True


class TestPlayerOperations:
    def test_fetch_owned_products(self, client, transport, product_raw):
        transport.respond(
            "hub/user/getproducts/110029109",
            {"details": {"ownedProducts": [product_raw]}},
        )

        owned = client.fetch_player_owned_products(110029109)

        assert owned is not None
        assert owned[0].product_id == "prod_abc123"
        assert client.cache.get(CacheCategory.PLAYERS, "ownedproducts.110029109") == owned

    @pytest.mark.parametrize("user_id", ["110029109", 1.5, None, True])
    def test_owned_products_requires_integer(self, client, transport, user_id):
        with pytest.raises(DomainError) as exc_info:
            client.fetch_player_owned_products(user_id)

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert transport.calls_to("hub/user/getproducts/110029109") == 0

    def test_fetch_roblox_profile(self, client, transport, profile_body):
        transport.respond("user/check/110029109?option=roblox", profile_body)

        profile = client.fetch_player_profile(110029109)

        assert profile is not None
        assert profile.is_verified is True
        assert client.cache.get(CacheCategory.PLAYERS, "profile.roblox.110029109") == profile

    def test_fetch_discord_profile_with_string_id(self, client, transport, profile_body):
        path = "user/check/123456789012345678?option=discord"
        transport.respond(path, profile_body)

        profile = client.fetch_player_profile("123456789012345678", UserType.DISCORD)

        assert profile is not None
        assert transport.calls_to(path) == 1

    def test_profile_type_accepts_string(self, client, transport, profile_body):
        transport.respond("user/check/42?option=discord", profile_body)

        assert client.fetch_player_profile(42, "discord") is not None

    def test_invalid_user_type(self, client):
        with pytest.raises(DomainError) as exc_info:
            client.fetch_player_profile(42, "steam")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR

    def test_roblox_profile_rejects_string_id(self, client):
        with pytest.raises(DomainError):
            client.fetch_player_profile("42", UserType.ROBLOX)


class TestWhitelist:
    """Whitelisting a player for a product."""

    def test_whitelist_posts_to_payments(self, client, transport):
        # Given
        transport.respond("hub/order/complete", {"message": "Success", "status": "success"})

        # When
        success, body = client.whitelist(110029109, "prod_abc123")

        # Then
        assert success is True
        assert body == {"message": "Success", "status": "success"}
        request = transport.requests[-1]
        assert request.method == "POST"
        assert request.is_payments_related is True
        assert request.body == {"robloxID": 110029109, "productID": "prod_abc123"}

    def test_whitelist_coerces_numeric_string_user(self, client, transport):
        transport.respond("hub/order/complete", {"status": "success"})

        client.whitelist("110029109", 77)

        assert transport.requests[-1].body == {"robloxID": 110029109, "productID": "77"}

    def test_whitelist_accepts_whole_float_user(self, client, transport):
        transport.respond("hub/order/complete", {"status": "success"})

        client.whitelist(110029109.0, "prod")

        assert transport.requests[-1].body == {"robloxID": 110029109, "productID": "prod"}
        assert isinstance(transport.requests[-1].body["robloxID"], int)

    def test_whitelist_is_never_cached(self, client, transport):
        transport.respond("hub/order/complete", {"status": "success"})
        entries_before = len(client.cache)

        client.whitelist(1, "prod")
        client.whitelist(1, "prod")

        assert transport.calls_to("hub/order/complete") == 2
        assert len(client.cache) == entries_before

    def test_whitelist_failure(self, client, transport, caplog):
        transport.respond(
            "hub/order/complete",
            {"message": "Product not found", "status": "error"},
            ok=False,
            status_code=404,
        )

        with caplog.at_level(logging.WARNING, logger="parcelize"):
            success, body = client.whitelist(1, "missing")

        assert success is False
        assert body["message"] == "Product not found"
        assert any("Failed to whitelist" in record.getMessage() for record in caplog.records)

    def test_whitelist_transport_failure(self, client, transport):
        success, body = client.whitelist(1, "prod")

        assert success is False
        assert body["status"] == "ConnectionError"

    @pytest.mark.parametrize(
        ("user_id", "product_id"),
        [
            ("abc", "prod"),
            (None, "prod"),
            (1.5, "prod"),
            (110029109.7, "prod"),
            ("1.5", "prod"),
            (float("inf"), "prod"),
            (float("nan"), "prod"),
            (1, None),
            (1, ""),
        ],
    )
    def test_whitelist_invalid_parameters(self, client, transport, user_id, product_id):
        with pytest.raises(DomainError) as exc_info:
            client.whitelist(user_id, product_id)

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert transport.calls_to("hub/order/complete") == 0


class TestClientLifecycle:
    def test_context_manager_closes_transport(self, client, transport):
        with client:
            pass

        assert transport.closed is True
