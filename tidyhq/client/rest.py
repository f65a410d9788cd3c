"""Async HTTP transport for the TidyHQ REST API."""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from tidyhq.core.config import get_settings
from tidyhq.core.exceptions import (
    APIException,
    ConnectionException,
    NotFoundException,
    UnauthorizedException,
)
from tidyhq.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)


@dataclass
class RestResponse:
    """Unwrapped API response."""

    data: Any
    status: int
    status_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Rest:
    """Makes authenticated requests to the TidyHQ API."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        host: Optional[str] = None,
        timeout: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize REST transport.

        Args:
            access_token: Default bearer token (default from settings)
            host: API base URL (default from settings)
            timeout: Request timeout in seconds (default from settings)
            client: Preconfigured httpx client (optional, mostly for tests)
        """
        self.access_token = access_token or settings.access_token
        self.host = host or settings.api_host
        self.timeout = timeout or settings.request_timeout

        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

    async def __aenter__(self) -> "Rest":
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.host,
                timeout=self.timeout,
                headers={
                    "User-Agent": settings.user_agent,
                    "Accept": "application/json",
                },
                follow_redirects=True,
            )
            self._owns_client = True

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def perform(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> RestResponse:
        """Make a single API request.

        Args:
            method: HTTP method
            path: Request path, including any query string
            body: JSON body (omitted when None)
            access_token: Token overriding the default for this call

        Returns:
            Unwrapped response

        Raises:
            ConnectionException: If the request could not be sent
            APIException: If the API answered with a non-2xx status
        """
        await self._ensure_client()
        assert self._client is not None

        token = access_token or self.access_token
        headers = {"Authorization": f"Bearer {token}"} if token else {}

        logger.debug("making_request", method=method, path=path)

        try:
            response = await self._client.request(
                method,
                path,
                json=body,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.warning("request_error", method=method, path=path, error=str(e))
            raise ConnectionException(
                f"Request failed: {e}",
                details={"method": method, "path": path},
            ) from e

        data = _decode(response)

        if response.is_success:
            logger.debug(
                "request_success",
                method=method,
                path=path,
                status=response.status_code,
            )
            return RestResponse(
                data=data,
                status=response.status_code,
                status_text=response.reason_phrase,
            )

        logger.warning(
            "http_error",
            method=method,
            path=path,
            status=response.status_code,
        )
        raise _error_for(response, data, method, path)

    async def get(self, path: str, access_token: Optional[str] = None) -> RestResponse:
        return await self.perform("GET", path, None, access_token)

    async def post(
        self, path: str, data: Optional[Any] = None, access_token: Optional[str] = None
    ) -> RestResponse:
        return await self.perform("POST", path, data if data is not None else {}, access_token)

    async def put(
        self, path: str, data: Optional[Any] = None, access_token: Optional[str] = None
    ) -> RestResponse:
        return await self.perform("PUT", path, data if data is not None else {}, access_token)

    async def patch(
        self, path: str, data: Optional[Any] = None, access_token: Optional[str] = None
    ) -> RestResponse:
        return await self.perform("PATCH", path, data if data is not None else {}, access_token)

    async def delete(
        self, path: str, data: Optional[Any] = None, access_token: Optional[str] = None
    ) -> RestResponse:
        return await self.perform("DELETE", path, data, access_token)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_for(response: httpx.Response, data: Any, method: str, path: str) -> APIException:
    details = {"method": method, "path": path, "response": data}
    message = f"HTTP error {response.status_code}"

    if response.status_code == 404:
        return NotFoundException(message, details=details)
    if response.status_code == 401:
        return UnauthorizedException(message, details=details)
    return APIException(message, status_code=response.status_code, details=details)
