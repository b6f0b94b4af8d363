r"""arefetch - HTTP requests with retries and exponential backoff.

This package sends one logical HTTP request with httpx and, when an
attempt fails with a retryable status code or with no response at all,
sends the identical request again after an exponentially growing delay.
When it finally gives up, the raised ``HttpRequestError`` carries the
final retry configuration, so callers can tell how many retries were
taken.

Key Features:
    - Retries on configurable status code ranges (1xx, 429 and 5xx by default)
    - Separate budget for network errors that produced no response
    - Only idempotent methods are retried by default
    - Exponential backoff: retry_delay * 2 ** (n - 1) milliseconds
    - ``should_retry`` predicate and ``on_retry_attempt`` observer hooks
    - Sync and async APIs, plus context manager clients

Example:
    ```pycon
    >>> from arefetch import request
    >>> response = request("https://api.example.com/data", retry=True)  # doctest: +SKIP
    >>> from arefetch import RetryClient, RetryConfig
    >>> with RetryClient(config=RetryConfig(retry=5)) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryClient",
    "HttpRequestError",
    "RetryClient",
    "RetryConfig",
    "__version__",
    "request",
    "request_async",
]

from importlib.metadata import PackageNotFoundError, version

from arefetch.client import RetryClient
from arefetch.client_async import AsyncRetryClient
from arefetch.core.config import RetryConfig
from arefetch.exceptions import HttpRequestError
from arefetch.request import request
from arefetch.request_async import request_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
