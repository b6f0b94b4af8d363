r"""Parameter validation utilities for HTTP request retry logic.

This module provides validation functions for the retry configuration
and the request description, so that invalid values are rejected before
the first attempt is sent.
"""

from __future__ import annotations

__all__ = [
    "HTTP_METHODS",
    "validate_method",
    "validate_retry_params",
    "validate_status_ranges",
    "validate_timeout",
    "validate_url",
]

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Sequence

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"}
)


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from arefetch.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_status_ranges(status_codes_to_retry: Sequence[Sequence[int]]) -> None:
    """Validate a sequence of inclusive ``(min, max)`` status code
    ranges.

    Args:
        status_codes_to_retry: The ranges to validate.

    Raises:
        ValueError: If a range does not have exactly two bounds or if
            its lower bound is greater than its upper bound.

    Example:
        ```pycon
        >>> from arefetch.core.validation import validate_status_ranges
        >>> validate_status_ranges([(429, 429), (500, 599)])
        >>> validate_status_ranges([(599, 500)])  # doctest: +SKIP

        ```
    """
    for status_range in status_codes_to_retry:
        if len(status_range) != 2:
            msg = f"status code range must be a (min, max) pair, got {status_range!r}"
            raise ValueError(msg)
        low, high = status_range
        if low > high:
            msg = f"status code range min must be <= max, got ({low}, {high})"
            raise ValueError(msg)


def validate_retry_params(
    retry: int,
    retry_delay: int = 0,
    no_response_retries: int = 0,
    should_retry: Any = None,
    on_retry_attempt: Any = None,
    http_methods_to_retry: Sequence[str] | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        retry: Maximum number of retry attempts after the initial attempt.
            Must be an integer >= 0. A value of 0 means no retries.
        retry_delay: Base backoff delay in milliseconds. Must be >= 0.
        no_response_retries: Maximum number of retries triggered by
            attempts that received no response. Must be >= 0.
        should_retry: Optional retry predicate. Must be callable if set.
        on_retry_attempt: Optional retry observer. Must be callable if set.
        http_methods_to_retry: Optional sequence of HTTP method names.
            A bare string is rejected.

    Raises:
        ValueError: If ``retry`` is not integral, if a count or delay is
            negative, if a hook is not callable, or if
            ``http_methods_to_retry`` is a string or holds an unknown
            method.

    Example:
        ```pycon
        >>> from arefetch.core.validation import validate_retry_params
        >>> validate_retry_params(retry=3, retry_delay=100, no_response_retries=2)
        >>> validate_retry_params(retry=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: retry must be >= 0, got -1

        ```
    """
    if isinstance(retry, str) or retry != int(retry):
        msg = f"retry must be an integer, got {retry!r}"
        raise ValueError(msg)
    if retry < 0:
        msg = f"retry must be >= 0, got {retry}"
        raise ValueError(msg)
    if retry_delay < 0:
        msg = f"retry_delay must be >= 0, got {retry_delay}"
        raise ValueError(msg)
    if no_response_retries < 0:
        msg = f"no_response_retries must be >= 0, got {no_response_retries}"
        raise ValueError(msg)
    if should_retry is not None and not callable(should_retry):
        msg = f"should_retry must be callable, got {type(should_retry).__name__}"
        raise ValueError(msg)
    if on_retry_attempt is not None and not callable(on_retry_attempt):
        msg = f"on_retry_attempt must be callable, got {type(on_retry_attempt).__name__}"
        raise ValueError(msg)
    if http_methods_to_retry is not None:
        if isinstance(http_methods_to_retry, str):
            msg = (
                "http_methods_to_retry must be a sequence of method names, "
                f"got the string {http_methods_to_retry!r}"
            )
            raise ValueError(msg)
        for method in http_methods_to_retry:
            validate_method(str(method).upper())


def validate_url(url: str | httpx.URL) -> None:
    """Validate that a URL is an absolute http or https URL.

    Args:
        url: The URL to validate.

    Raises:
        ValueError: If the URL cannot be parsed, is relative, or does not
            use the http or https scheme.

    Example:
        ```pycon
        >>> from arefetch.core.validation import validate_url
        >>> validate_url("https://example.com/data")
        >>> validate_url("/data")  # doctest: +SKIP

        ```
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        msg = f"invalid URL {str(url)!r}: {exc}"
        raise ValueError(msg) from exc
    if parsed.is_relative_url or not parsed.host:
        msg = f"URL must be absolute, got {str(url)!r}"
        raise ValueError(msg)
    if parsed.scheme not in ("http", "https"):
        msg = f"URL scheme must be http or https, got {parsed.scheme!r}"
        raise ValueError(msg)


def validate_method(method: str) -> None:
    """Validate that a method is one of the standard HTTP verbs.

    Args:
        method: The upper-case HTTP method name.

    Raises:
        ValueError: If the method is not a standard HTTP verb.
    """
    if method not in HTTP_METHODS:
        msg = f"method must be one of {sorted(HTTP_METHODS)}, got {method!r}"
        raise ValueError(msg)
