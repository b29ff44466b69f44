"""HTTP transport for the Parcel API.

Wraps a ``requests.Session`` that carries the JSON content type and the
hub secret key on every request. Failures never raise: they are logged as
warnings and reported through ``TransportResponse`` so the caller can fall
back to an empty result.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import requests

from parcelize.shared.constants import APIFields, ParcelAPIConfig
from parcelize.shared.errors import ErrorCode, create_api_error, create_parsing_error
from parcelize.shared.logging import log_api_call, log_operation_error

logger = logging.getLogger(__name__)


def _error_code(error: requests.RequestException) -> ErrorCode:
    if isinstance(error, requests.Timeout):
        return ErrorCode.API_TIMEOUT
    if isinstance(error, requests.ConnectionError):
        return ErrorCode.NETWORK_ERROR
    return ErrorCode.API_REQUEST_FAILED


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one request.

    Attributes:
        ok: The request completed with a 2xx status.
        body: Decoded JSON body, the raw status message when the body was
            not JSON, or an error object when no response arrived.
        status_code: HTTP status, None when no response arrived.
        status_message: HTTP reason phrase or the transport error text.
        parsed: Whether ``body`` holds decoded JSON.
    """

    ok: bool
    body: Any
    status_code: int | None = None
    status_message: str = ""
    parsed: bool = False


class ParcelTransport:
    """Issues requests against the hub or payments endpoint.

    Args:
        auth_token: Hub secret key sent as ``hub-secret-key``.
        api_endpoint: Host and base path of the hub API.
        payments_endpoint: Host and base path of the payments API.
        timeout: Request timeout in seconds.
        session: Optional pre-built session (tests, custom adapters).
    """

    def __init__(
        self,
        auth_token: str,
        api_endpoint: str = ParcelAPIConfig.API_ENDPOINT,
        payments_endpoint: str = ParcelAPIConfig.PAYMENTS_ENDPOINT,
        timeout: float = ParcelAPIConfig.REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_endpoint = api_endpoint.strip("/")
        self.payments_endpoint = payments_endpoint.strip("/")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": ParcelAPIConfig.CONTENT_TYPE,
                ParcelAPIConfig.AUTH_HEADER: auth_token,
            },
        )

    def build_url(self, path: str, *, is_payments_related: bool = False) -> str:
        """Full URL of ``path`` on the selected endpoint."""
        endpoint = self.payments_endpoint if is_payments_related else self.api_endpoint
        return ParcelAPIConfig.URL_TEMPLATE.format(endpoint=endpoint, path=path.lstrip("/"))

    def request(
        self,
        path: str,
        method: str = ParcelAPIConfig.DEFAULT_METHOD,
        body: Any | None = None,
        *,
        is_payments_related: bool = False,
    ) -> TransportResponse:
        """Send one request and decode its JSON body.

        Args:
            path: Path relative to the endpoint, query string included.
            method: HTTP method.
            body: JSON-serializable request body, omitted when None.
            is_payments_related: Use the payments endpoint.

        Returns:
            TransportResponse describing the outcome.
        """
        url = self.build_url(path, is_payments_related=is_payments_related)
        started = time.perf_counter()

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            error = create_api_error(
                f"Failed to {method} {path}: {e!s}",
                path=path,
                operation="request",
                original_error=e,
                code=_error_code(e),
            )
            log_operation_error(logger, error, level=logging.WARNING)
            return TransportResponse(
                ok=False,
                body={
                    APIFields.MESSAGE: str(e),
                    APIFields.STATUS: type(e).__name__,
                },
                status_message=str(e),
            )

        duration_ms = (time.perf_counter() - started) * 1000
        log_api_call(
            logger,
            endpoint=path,
            method=method,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        status_message = response.reason or ""
        try:
            decoded = response.json()
        except ValueError as e:
            error = create_parsing_error(
                f"Failed to parse JSON for {path}: {e!s}",
                path=path,
                operation="request",
                original_error=e,
            )
            log_operation_error(
                logger,
                error,
                additional_context={"status_code": response.status_code},
                level=logging.WARNING,
            )
            return TransportResponse(
                ok=response.ok,
                body=status_message,
                status_code=response.status_code,
                status_message=status_message,
            )

        return TransportResponse(
            ok=response.ok,
            body=decoded,
            status_code=response.status_code,
            status_message=status_message,
            parsed=True,
        )

    def close(self) -> None:
        """Release the underlying session."""
        self.session.close()
