r"""Asynchronous context manager client for HTTP requests with retries.

This module provides the async counterpart of ``RetryClient``. The
AsyncRetryClient manages the underlying httpx.AsyncClient lifecycle and
applies a shared default retry configuration to every request.
"""

from __future__ import annotations

__all__ = ["AsyncRetryClient"]

from typing import TYPE_CHECKING, Any

import httpx

from arefetch.core.config import DEFAULT_TIMEOUT, RetryConfig, build_retry_config
from arefetch.core.validation import validate_timeout
from arefetch.request_async import request_async

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self


class AsyncRetryClient:
    r"""Asynchronous context manager for HTTP requests with retries.

    Args:
        config: Default retry configuration for all requests. If ``None``,
            ``RetryConfig()`` is used, so retries are enabled.
        timeout: Maximum seconds to wait for server responses. Must be > 0.
        **kwargs: Additional keyword arguments passed to the underlying httpx
            client, e.g. ``headers`` or ``transport``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arefetch import AsyncRetryClient, RetryConfig
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRetryClient(config=RetryConfig(retry=5)) as client:
        ...         response = await client.get("https://api.example.com/data")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: RetryConfig | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        **kwargs: Any,
    ) -> None:
        validate_timeout(timeout)
        self._timeout = timeout
        self._client_kwargs = kwargs
        self._config = config if config is not None else RetryConfig()

        # Client will be created when entering context
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> RetryConfig:
        """The default retry configuration."""
        return self._config

    async def __aenter__(self) -> Self:
        self._client = httpx.AsyncClient(timeout=self._timeout, **self._client_kwargs)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the client is available for use.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if self._client is None:
            msg = "AsyncRetryClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        retry: bool | None = None,
        retry_config: RetryConfig | Mapping[str, Any] | None = None,
        validate_status: Callable[[int], bool] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        r"""Send an HTTP request with automatic retry logic.

        Args:
            method: The HTTP method.
            url: The URL to send the request to.
            retry: ``False`` disables retries for this request.
            retry_config: Overrides merged onto the client's default
                configuration for this request.
            validate_status: Predicate telling whether a response status
                is acceptable. Defaults to accepting 2xx and 3xx.
            **kwargs: Request fields passed to ``arefetch.request_async``.

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            RuntimeError: If called outside of a context manager.
            HttpRequestError: If the request fails and is not retried any
                more.
        """
        client = self._ensure_client()
        config = build_retry_config(
            retry=retry,
            retry_config=retry_config if retry_config is not None else self._config,
            defaults=self._config,
        )
        return await request_async(
            url,
            method,
            retry_config=config,
            validate_status=validate_status,
            client=client,
            **kwargs,
        )

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP GET request with automatic retry logic."""
        return await self.request("GET", url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP HEAD request with automatic retry logic."""
        return await self.request("HEAD", url, **kwargs)

    async def options(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP OPTIONS request with automatic retry logic."""
        return await self.request("OPTIONS", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PUT request with automatic retry logic."""
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP DELETE request with automatic retry logic."""
        return await self.request("DELETE", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP POST request, retried only if configured."""
        return await self.request("POST", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PATCH request, retried only if configured."""
        return await self.request("PATCH", url, **kwargs)
