r"""Contain the asynchronous entry point for HTTP requests with automatic
retry logic."""

from __future__ import annotations

__all__ = ["request_async"]

from functools import partial
from typing import TYPE_CHECKING, Any

import httpx

from arefetch.core.config import DEFAULT_TIMEOUT, build_retry_config
from arefetch.core.validation import validate_timeout
from arefetch.retry import AsyncRetryExecutor
from arefetch.transport import RequestDescriptor, send_request_async

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from arefetch.core.config import RetryConfig


async def request_async(
    url: str,
    method: str = "GET",
    *,
    retry: bool | None = None,
    retry_config: RetryConfig | Mapping[str, Any] | None = None,
    validate_status: Callable[[int], bool] | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, Any] | None = None,
    content: str | bytes | None = None,
    data: Mapping[str, Any] | None = None,
    json: Any = None,
) -> httpx.Response:
    """Perform an async HTTP request with automatic retry logic.

    This is the asynchronous counterpart of ``arefetch.request`` and
    accepts the same arguments. Backoff delays use ``asyncio.sleep`` so
    concurrent calls keep running while this one waits.

    Args:
        url: The absolute URL to send the request to.
        method: The HTTP method. Defaults to ``GET``.
        retry: ``True`` enables retries with the default configuration,
            ``False`` disables them even if ``retry_config`` is given.
        retry_config: A ``RetryConfig`` or a mapping of its field names.
        validate_status: Predicate telling whether a response status is
            acceptable. Defaults to accepting 2xx and 3xx.
        client: An optional httpx.AsyncClient object to use for making
            requests. If None, a new client will be created and closed
            after use.
        timeout: Maximum seconds to wait for server responses.
            Only used if client is None. Must be > 0.
        headers: Optional request headers.
        params: Optional query parameters.
        content: Optional raw request body.
        data: Optional form data.
        json: Optional JSON-serializable body.

    Returns:
        The httpx.Response of the attempt that ended the call.

    Raises:
        HttpRequestError: If the request fails and is not retried any
            more.
        ValueError: If the URL, method, timeout or retry configuration
            is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arefetch import request_async
        >>> async def example():
        ...     response = await request_async("https://api.example.com/data", retry=True)
        ...     return response.status_code
        ...
        >>> asyncio.run(example())  # doctest: +SKIP

        ```
    """
    descriptor = RequestDescriptor(
        url=url,
        method=method,
        headers=headers,
        params=params,
        content=content,
        data=data,
        json=json,
    )
    config = build_retry_config(retry=retry, retry_config=retry_config)
    executor = AsyncRetryExecutor(config, validate_status=validate_status)

    validate_timeout(timeout)
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=timeout)
    try:
        return await executor.execute(descriptor, partial(send_request_async, client))
    finally:
        if owns_client:
            await client.aclose()
