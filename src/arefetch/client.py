r"""Synchronous context manager client for HTTP requests with retries.

This module provides a context manager-based client for making multiple
HTTP requests with a shared default retry configuration. The
RetryClient manages the underlying httpx.Client lifecycle; every request
still gets its own fresh retry configuration.
"""

from __future__ import annotations

__all__ = ["RetryClient"]

from typing import TYPE_CHECKING, Any

import httpx

from arefetch.core.config import DEFAULT_TIMEOUT, RetryConfig, build_retry_config
from arefetch.core.validation import validate_timeout
from arefetch.request import request

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self


class RetryClient:
    r"""Context manager for HTTP requests with retries.

    Args:
        config: Default retry configuration for all requests. If ``None``,
            ``RetryConfig()`` is used, so retries are enabled.
        timeout: Maximum seconds to wait for server responses. Must be > 0.
        **kwargs: Additional keyword arguments passed to the underlying httpx
            client, e.g. ``headers`` or ``transport``.

    Example:
        ```pycon
        >>> from arefetch import RetryClient, RetryConfig
        >>> with RetryClient(config=RetryConfig(retry=5), timeout=30) as client:  # doctest: +SKIP
        ...     response1 = client.get("https://api.example.com/data1")
        ...     response2 = client.put("https://api.example.com/data2", json={"key": "value"})
        ...

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
        self._client: httpx.Client | None = None

    @property
    def config(self) -> RetryConfig:
        """The default retry configuration."""
        return self._config

    def __enter__(self) -> Self:
        self._client = httpx.Client(timeout=self._timeout, **self._client_kwargs)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Ensure the client is available for use.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if self._client is None:
            msg = "RetryClient must be used within a context manager (with statement)"
            raise RuntimeError(msg)
        return self._client

    def request(
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
                configuration for this request. A ``RetryConfig``
                replaces the default entirely.
            validate_status: Predicate telling whether a response status
                is acceptable. Defaults to accepting 2xx and 3xx.
            **kwargs: Request fields passed to ``arefetch.request``
                (``headers``, ``params``, ``content``, ``data``, ``json``).

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
        return request(
            url,
            method,
            retry_config=config,
            validate_status=validate_status,
            client=client,
            **kwargs,
        )

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP GET request with automatic retry logic."""
        return self.request("GET", url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP HEAD request with automatic retry logic."""
        return self.request("HEAD", url, **kwargs)

    def options(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP OPTIONS request with automatic retry logic."""
        return self.request("OPTIONS", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PUT request with automatic retry logic."""
        return self.request("PUT", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP DELETE request with automatic retry logic."""
        return self.request("DELETE", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP POST request.

        POST is not in the default ``http_methods_to_retry``, so it is
        only retried if the configuration says so.
        """
        return self.request("POST", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PATCH request.

        PATCH is not in the default ``http_methods_to_retry``.
        """
        return self.request("PATCH", url, **kwargs)
