"""
HTTP Transport for provider gateways.

Handles HTTP communication with a hosting provider API, request/response
logging and normalization of error responses into the shared error taxonomy.
"""

import time
from typing import Any

import httpx

from quickgit.exceptions import (
    AuthenticationFailed,
    NameConflict,
    NotFoundError,
    ProviderError,
)
from quickgit.logging import log_http_request, log_http_response


class HTTPTransport:
    """
    HTTP transport layer for a single provider API.

    Handles:
    - A shared httpx client with base URL, default headers and timeout
    - Debug logging of requests and responses with secrets masked
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        platform: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            platform: Platform name used in error details
            timeout: Request timeout in seconds
            headers: Default headers sent with every request
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.platform = platform
        self.timeout = timeout

        default_headers = {"Content-Type": "application/json"}
        default_headers.update(headers or {})

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=default_headers,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make a request and return the raw response, whatever its status.

        Raises:
            ProviderError: On network errors
        """
        log_http_request(method, f"{self.base_url}{path}", params=params, body=body)
        started = time.monotonic()
        try:
            response = self._client.request(
                method, path, params=params, json=body, headers=headers
            )
        except httpx.RequestError as e:
            raise ProviderError(
                "CONNECTION_ERROR", str(e), platform=self.platform
            ) from e

        log_http_response(
            response.status_code,
            f"{self.base_url}{path}",
            body=_safe_json(response),
            elapsed_ms=(time.monotonic() - started) * 1000,
        )
        return response

    def request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Make a request and return the parsed JSON body of a successful response.

        Raises:
            AuthenticationFailed: On 401
            NotFoundError: On 404
            NameConflict: On 422
            ProviderError: On any other error or a non-JSON body
        """
        response = self.request(method, path, params=params, body=body, headers=headers)

        if response.status_code >= 400:
            raise self.parse_error_response(response)

        data = _safe_json(response)
        if not isinstance(data, dict):
            raise ProviderError(
                "MALFORMED_RESPONSE",
                f"Expected a JSON object from {self.platform}",
                status_code=response.status_code,
                platform=self.platform,
            )
        return data

    def parse_error_response(self, response: httpx.Response) -> ProviderError | AuthenticationFailed | NameConflict:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate exception instance
        """
        message = error_message(response)
        status_code = response.status_code

        if status_code == 401:
            return AuthenticationFailed("AUTHENTICATION_FAILED", message)
        elif status_code == 404:
            return NotFoundError(
                "NOT_FOUND", message, status_code=status_code, platform=self.platform
            )
        elif status_code == 422:
            return NameConflict("NAME_CONFLICT", message)
        else:
            return ProviderError(
                "PROVIDER_ERROR",
                f"{self.platform} returned HTTP {status_code}: {message}",
                status_code=status_code,
                platform=self.platform,
            )


def error_message(response: httpx.Response) -> str:
    """Extract a human-readable message from a provider error body."""
    data = _safe_json(response)
    if not isinstance(data, dict):
        return f"HTTP {response.status_code}"

    parts = [str(data["message"])] if data.get("message") else []
    # GitHub puts details in an "errors" list
    for item in data.get("errors") or []:
        if isinstance(item, dict) and item.get("message"):
            parts.append(str(item["message"]))
        elif isinstance(item, str):
            parts.append(item)
    return "; ".join(parts) or f"HTTP {response.status_code}"


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
