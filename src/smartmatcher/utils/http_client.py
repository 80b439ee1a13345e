"""HTTP client utilities for smartmatcher."""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

import aiohttp
from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = ClientTimeout(total=30, connect=10)

TokenProvider = Callable[[], Optional[str]]


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    pass


class HTTPRequestError(HTTPClientError):
    """Exception raised for HTTP request errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
        data: Any = None,
    ) -> None:
        self.status = status
        self.url = url
        self.method = method
        self.data = data
        super().__init__(message)

    @property
    def detail(self) -> Optional[str]:
        """The backend's ``detail`` or ``message`` field, if present."""
        if isinstance(self.data, dict):
            for key in ("detail", "message"):
                value = self.data.get(key)
                if isinstance(value, str) and value:
                    return value
        return None


class HTTPClient:
    """Asynchronous HTTP client that signs requests with a bearer token.

    Every request is logged on the way out and every response (or failure)
    on the way back. Failed requests are not retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        token_provider: Optional[TokenProvider] = None,
        raise_for_status: bool = True,
        session: Optional[ClientSession] = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL for all requests.
            timeout: Default total timeout in seconds.
            connect_timeout: Default connect timeout in seconds.
            headers: Default headers to include in all requests.
            token_provider: Callable returning the current bearer token, read
                again before every request.
            raise_for_status: Whether to raise an exception for non-2xx responses.
            session: Optional aiohttp ClientSession to use.
        """
        self.base_url = base_url.rstrip("/") if base_url else None
        if timeout is not None:
            self.timeout = ClientTimeout(total=timeout, connect=connect_timeout)
        else:
            self.timeout = DEFAULT_TIMEOUT
        self.headers = headers or {}
        self.token_provider = token_provider
        self.raise_for_status = raise_for_status
        self._session = session
        self._session_owner = session is None

    async def __aenter__(self) -> "HTTPClient":
        if self._session is None:
            self._session = ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._session_owner and self._session and not self._session.closed:
            await self._session.close()
        if self._session_owner:
            self._session = None

    def build_url(self, url: str) -> str:
        if self.base_url and not (
            url.startswith("http://") or url.startswith("https://")
        ):
            return f"{self.base_url}/{url.lstrip('/')}"
        return url

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        request_headers = self.headers.copy()
        if self.token_provider is not None:
            token = self.token_provider()
            if token:
                request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)
        return request_headers

    @staticmethod
    async def _parse_body(response: ClientResponse) -> Union[Dict[str, Any], list, str, bytes, None]:
        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            try:
                return await response.json()
            except (json.JSONDecodeError, aiohttp.ContentTypeError):
                return await response.text()
        if "text/" in content_type:
            return await response.text()
        body = await response.read()
        return body or None

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        data: Any = None,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        raise_for_status: Optional[bool] = None,
        **kwargs: Any,
    ) -> Tuple[ClientResponse, Any]:
        """Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.).
            url: URL to request (can be relative if base_url is set).
            params: Query parameters.
            data: Request body (form fields, ``aiohttp.FormData``, bytes or str).
            json_data: JSON-serializable data to send in the request body.
            headers: Additional headers for this request.
            raise_for_status: Whether to raise an exception for non-2xx responses.
            **kwargs: Additional arguments to pass to aiohttp.ClientSession.request.

        Returns:
            A tuple of (response, parsed_response_data).

        Raises:
            HTTPRequestError: If the request fails or returns a non-2xx status.
        """
        if self._session is None:
            raise RuntimeError(
                "HTTPClient is not initialized. Use async with HTTPClient()"
            )

        if raise_for_status is None:
            raise_for_status = self.raise_for_status

        method = method.upper()
        url = self.build_url(url)
        request_headers = self._build_headers(headers)

        logger.debug(
            "API Request: %s %s", method, url, extra={"params": params, "body": json_data}
        )

        try:
            async with self._session.request(
                method=method,
                url=url,
                params=params,
                data=data,
                json=json_data,
                headers=request_headers,
                **kwargs,
            ) as response:
                response_data = await self._parse_body(response)
        except (ClientError, asyncio.TimeoutError) as e:
            logger.error("API Request Error: %s %s: %s", method, url, e)
            raise HTTPRequestError(
                f"Request failed for {method} {url}: {e}",
                url=url,
                method=method,
            ) from e

        if response.status >= 400:
            logger.error(
                "API Response Error: status=%s url=%s data=%s",
                response.status,
                url,
                response_data,
            )
            if raise_for_status:
                raise HTTPRequestError(
                    f"HTTP {response.status} for {method} {url}",
                    status=response.status,
                    url=url,
                    method=method,
                    data=response_data,
                )
        else:
            logger.debug("API Response: status=%s url=%s", response.status, url)

        return response, response_data

    # Convenience methods for common HTTP methods

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Tuple[ClientResponse, Any]:
        """Send a GET request."""
        return await self.request("GET", url, params=params, headers=headers, **kwargs)

    async def post(
        self,
        url: str,
        data: Any = None,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Tuple[ClientResponse, Any]:
        """Send a POST request."""
        return await self.request(
            "POST", url, data=data, json_data=json_data, headers=headers, **kwargs
        )

    async def put(
        self,
        url: str,
        data: Any = None,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Tuple[ClientResponse, Any]:
        """Send a PUT request."""
        return await self.request(
            "PUT", url, data=data, json_data=json_data, headers=headers, **kwargs
        )

    async def delete(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> Tuple[ClientResponse, Any]:
        """Send a DELETE request."""
        return await self.request("DELETE", url, headers=headers, **kwargs)
