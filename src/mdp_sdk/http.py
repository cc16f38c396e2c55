"""
HttpTransport - JSON client for the MDP marketplace API
"""

import logging
from typing import Any

import httpx

from mdp_sdk.exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
}


class HttpTransport:
    """
    Async JSON transport with bearer-token authentication.

    Non-2xx responses raise APIError subclasses; the message is taken from
    the body's "error" field when the response is JSON.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: API base URL
            token: Bearer token for authenticated requests
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            http_client: Pre-configured client (e.g. with a mock transport)
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._headers = headers or {}
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token(self, token: str | None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """
        Send a request and decode the response.

        Args:
            method: HTTP method
            path: Path relative to the base URL (e.g. "/api/payments")
            params: Query parameters; None values are dropped
            body: JSON body

        Returns:
            Decoded JSON, or the response text for non-JSON responses

        Raises:
            APIError: On a non-2xx response
            RequestTimeoutError: If the request times out
            NetworkError: If the request fails at the transport level
        """
        client = await self._get_client()
        headers = dict(self._headers)
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        query = {k: str(v) for k, v in (params or {}).items() if v is not None}
        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = await client.request(
                method,
                url,
                params=query or None,
                json=body,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out after {self._timeout}s")
            raise RequestTimeoutError() from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(f"Request to {path} failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        is_json = "application/json" in response.headers.get("content-type", "")

        if response.is_success:
            return response.json() if is_json else response.text

        message = response.reason_phrase or f"HTTP {response.status_code}"
        error_body = None
        if is_json:
            try:
                error_body = response.json()
            except ValueError:
                error_body = None
            if isinstance(error_body, dict) and error_body.get("error"):
                message = str(error_body["error"])

        logger.debug(f"API error {response.status_code}: {message}")
        error_cls = _STATUS_ERRORS.get(response.status_code)
        if error_cls is not None:
            raise error_cls(message, response=error_body)
        raise APIError(message, response.status_code, error_body)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
