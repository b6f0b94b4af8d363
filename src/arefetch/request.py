r"""Contain the synchronous entry point for HTTP requests with automatic
retry logic."""

from __future__ import annotations

__all__ = ["request"]

from functools import partial
from typing import TYPE_CHECKING, Any

import httpx

from arefetch.core.config import DEFAULT_TIMEOUT, build_retry_config
from arefetch.core.validation import validate_timeout
from arefetch.retry import RetryExecutor
from arefetch.transport import RequestDescriptor, send_request

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from arefetch.core.config import RetryConfig


def request(
    url: str,
    method: str = "GET",
    *,
    retry: bool | None = None,
    retry_config: RetryConfig | Mapping[str, Any] | None = None,
    validate_status: Callable[[int], bool] | None = None,
    client: httpx.Client | None = None,
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, Any] | None = None,
    content: str | bytes | None = None,
    data: Mapping[str, Any] | None = None,
    json: Any = None,
) -> httpx.Response:
    """Perform an HTTP request with automatic retry logic.

    Failed attempts are retried with exponential backoff:
    ``retry_delay * (2 ** (n - 1))`` milliseconds before the n-th retry.
    Two kinds of failures can be retried:
    1. Responses whose status code falls in ``status_codes_to_retry``
    2. Network errors where no response was received, at most
       ``no_response_retries`` times

    Only methods in ``http_methods_to_retry`` are retried.

    Args:
        url: The absolute URL to send the request to.
        method: The HTTP method. Defaults to ``GET``.
        retry: ``True`` enables retries with the default configuration,
            ``False`` disables them even if ``retry_config`` is given.
        retry_config: A ``RetryConfig`` or a mapping of its field names.
            On its own it enables retries, with its values on top of the
            defaults.
        validate_status: Predicate telling whether a response status is
            acceptable. Defaults to accepting 2xx and 3xx; a non-acceptable
            response that is not retried raises ``HttpRequestError``.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
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
            more. ``error.config.current_retry_attempt`` is the number of
            retries that were taken.
        ValueError: If the URL, method, timeout or retry configuration
            is invalid.

    Example:
        ```pycon
        >>> from arefetch import request
        >>> response = request("https://api.example.com/data", retry=True)  # doctest: +SKIP
        >>> response = request(
        ...     "https://api.example.com/data",
        ...     retry_config={"retry": 5, "retry_delay": 250},
        ... )  # doctest: +SKIP

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
    executor = RetryExecutor(config, validate_status=validate_status)

    validate_timeout(timeout)
    owns_client = client is None
    client = client or httpx.Client(timeout=timeout)
    try:
        return executor.execute(descriptor, partial(send_request, client))
    finally:
        if owns_client:
            client.close()
