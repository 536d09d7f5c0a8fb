"""HTTP client wrapper for the remote task service.

This module provides a thin wrapper around httpx that handles:
- Base URL, timeout and ``api-key`` header configuration
- JSON request bodies and response parsing
- Mapping unexpected status codes and transport failures to tracker errors

Requests are never retried: a failed call surfaces immediately.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from task_tracker.exceptions import RemoteFailureError, TransportError

if TYPE_CHECKING:
    from task_tracker.config import TrackerConfig

logger = logging.getLogger(__name__)


class HTTPClient:
    """Low-level HTTP client for the remote task service.

    Note:
        This is an internal class. Use RemoteBackend for the public API.

    """

    __slots__ = ("_client", "_config")

    API_KEY_HEADER = "api-key"
    USER_AGENT = "task-tracker/1.0"

    def __init__(
        self,
        config: TrackerConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            config: Tracker configuration with base_url and api_key set.
            transport: Optional httpx transport, used by tests to stub the
                       service.

        """
        self._config = config
        self._client = self._create_client(transport)

    def _create_client(self, transport: httpx.BaseTransport | None) -> httpx.Client:
        """Create and configure the httpx client."""
        return httpx.Client(
            base_url=self._config.base_url or "",
            timeout=httpx.Timeout(self._config.timeout),
            headers={
                self.API_KEY_HEADER: self._config.api_key or "",
                "Accept": "application/json",
                "User-Agent": self.USER_AGENT,
            },
            transport=transport,
        )

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        expected_status: int = 200,
        json_data: dict[str, Any] | None = None,
    ) -> HTTPResponse:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            endpoint: API endpoint path (e.g., "/tasks/3").
            expected_status: The only status code treated as success.
            json_data: JSON body for POST/PUT requests.

        Returns:
            HTTPResponse containing the parsed data and status.

        Raises:
            RemoteFailureError: For any status other than expected_status.
            TransportError: For connection failures and timeouts.

        """
        logger.debug("Request: %s %s", method, endpoint)

        try:
            response = self._client.request(method, endpoint, json=json_data)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", original_error=e) from e
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", original_error=e) from e
        except httpx.TransportError as e:
            raise TransportError(f"Transport error: {e}", original_error=e) from e

        return self._process_response(response, expected_status)

    def _process_response(self, response: httpx.Response, expected_status: int) -> HTTPResponse:
        """Check the status code and parse the body."""
        logger.debug("Response: %d %s", response.status_code, response.reason_phrase)

        if response.status_code != expected_status:
            logger.warning(
                "Unexpected status %d (wanted %d) for %s %s",
                response.status_code,
                expected_status,
                response.request.method,
                response.request.url.path,
            )
            raise RemoteFailureError(
                status_code=response.status_code,
                body=response.text,
                expected_status=expected_status,
            )

        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text

        return HTTPResponse(data=data, status_code=response.status_code)

    def get(self, endpoint: str) -> HTTPResponse:
        return self.request("GET", endpoint)

    def post(
        self,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
        expected_status: int = 200,
    ) -> HTTPResponse:
        return self.request("POST", endpoint, json_data=json_data, expected_status=expected_status)

    def put(self, endpoint: str, json_data: dict[str, Any] | None = None) -> HTTPResponse:
        return self.request("PUT", endpoint, json_data=json_data)

    def delete(self, endpoint: str) -> HTTPResponse:
        return self.request("DELETE", endpoint)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> HTTPClient:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close client."""
        self.close()


class HTTPResponse:
    """Container for HTTP response data.

    Attributes:
        data: Parsed JSON body, raw text for non-JSON bodies, or None.
        status_code: HTTP status code.

    """

    __slots__ = ("data", "status_code")

    def __init__(self, data: Any, status_code: int) -> None:
        self.data = data
        self.status_code = status_code

    def __repr__(self) -> str:
        """Return a representation of the response."""
        return f"HTTPResponse(status={self.status_code}, data_type={type(self.data).__name__})"
