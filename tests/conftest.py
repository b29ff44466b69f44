"""
Pytest configuration and shared fixtures for Parcelize tests.

Provides a controllable clock, a scripted transport, a fake host runtime
and sample Parcel API payloads.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any

import pytest

from parcelize.config.models.settings import Settings
from parcelize.services.parcel_client import ParcelClient
from parcelize.services.transport import TransportResponse

HUB_INFO_BODY = {"totalSales": "1520", "musicId": 1837070127}

PRODUCT_RAW = {
    "name": "Luxury BMW M Series",
    "description": "A very fast car",
    "decalID": "6012345678",
    "category": "Vehicles",
    "tags": ["car", "bmw"],
    "stock": "5",
    "productID": "prod_abc123",
    "devproduct_id": 1650000001,
    "packables": {
        "delivery": ["roblox"],
        "display_robux": True,
        "onsale_usd": True,
        "price_in_usd": "4.99",
        "stripe": {"price_id": "price_123"},
    },
}

PRODUCTS_BODY = {
    "details": {
        "hubId": "hub_42",
        "products": [
            PRODUCT_RAW,
            {"name": "Sticker Pack", "productID": "prod_def456", "stock": True},
        ],
    },
}

BESTSELLER_BODY = {"details": {"hubId": "hub_42", "product": PRODUCT_RAW}}

PROFILE_BODY = {
    "details": {
        "discordID": "123456789012345678",
        "verified": True,
        "robloxID": "110029109",
        "discordTag": "parcel#0001",
    },
}


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class RecordedRequest:
    path: str
    method: str
    body: Any
    is_payments_related: bool


class FakeTransport:
    """Transport answering from a path -> response table.

    Unknown paths answer with a failed, unparsed response.
    """

    def __init__(self, routes: dict[str, TransportResponse] | None = None) -> None:
        self.routes: dict[str, TransportResponse] = dict(routes or {})
        self.requests: list[RecordedRequest] = []
        self.closed = False

    def respond(self, path: str, body: Any, *, ok: bool = True, status_code: int = 200) -> None:
        self.routes[path] = ok_response(body, ok=ok, status_code=status_code)

    def fail(self, path: str) -> None:
        self.routes[path] = failed_response()

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Any | None = None,
        *,
        is_payments_related: bool = False,
    ) -> TransportResponse:
        self.requests.append(RecordedRequest(path, method, body, is_payments_related))
        return self.routes.get(path, failed_response())

    def calls_to(self, path: str) -> int:
        return sum(1 for request in self.requests if request.path == path)

    def close(self) -> None:
        self.closed = True


@dataclass
class FakeHost:
    server: bool = True
    studio: bool = False
    http: bool = True
    secrets: dict[str, str] = field(default_factory=dict)

    def is_server(self) -> bool:
        return self.server

    def is_studio(self) -> bool:
        return self.studio

    def http_enabled(self) -> bool:
        return self.http

    def get_secret(self, name: str) -> str | None:
        return self.secrets.get(name)


def ok_response(body: Any, *, ok: bool = True, status_code: int = 200) -> TransportResponse:
    return TransportResponse(
        ok=ok,
        body=body,
        status_code=status_code,
        status_message="OK" if ok else "Error",
        parsed=True,
    )


def failed_response() -> TransportResponse:
    return TransportResponse(
        ok=False,
        body={"message": "connection refused", "status": "ConnectionError"},
        status_message="connection refused",
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep PARCEL_* variables of the developer shell out of the tests.

    Also restores the package logger, which CLI runs reconfigure.
    """
    for name in list(os.environ):
        if name.startswith("PARCEL_"):
            monkeypatch.delenv(name, raising=False)

    yield

    package_logger = logging.getLogger("parcelize")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def transport() -> FakeTransport:
    fake = FakeTransport()
    fake.respond("hub/getinfo", HUB_INFO_BODY)
    return fake


@pytest.fixture
def client(
    settings: Settings,
    host: FakeHost,
    transport: FakeTransport,
    clock: FakeClock,
) -> ParcelClient:
    return ParcelClient(
        "test-token",
        settings=settings,
        host=host,
        transport=transport,
        clock=clock,
    )


@pytest.fixture
def hub_info_body() -> dict[str, Any]:
    return copy.deepcopy(HUB_INFO_BODY)


@pytest.fixture
def product_raw() -> dict[str, Any]:
    return copy.deepcopy(PRODUCT_RAW)


@pytest.fixture
def products_body() -> dict[str, Any]:
    return copy.deepcopy(PRODUCTS_BODY)


@pytest.fixture
def bestseller_body() -> dict[str, Any]:
    return copy.deepcopy(BESTSELLER_BODY)


@pytest.fixture
def profile_body() -> dict[str, Any]:
    return copy.deepcopy(PROFILE_BODY)


@pytest.fixture
def make_client(settings: Settings, transport: FakeTransport, clock: FakeClock):
    """Factory for clients built against the shared fake transport."""

    def _make(
        auth_token: str | None = "test-token",
        force_debugging: bool | None = None,
        host: FakeHost | None = None,
    ) -> ParcelClient:
        return ParcelClient(
            auth_token,
            force_debugging,
            settings=settings,
            host=host or FakeHost(),
            transport=transport,
            clock=clock,
        )

    return _make
