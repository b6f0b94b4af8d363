r"""Retry configuration dataclass and defaults.

This module provides the default retry settings and the ``RetryConfig``
dataclass. A fresh ``RetryConfig`` is built for every top-level call by
``build_retry_config``, which merges the caller's overrides onto the
defaults.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_NO_RESPONSE_RETRIES",
    "DEFAULT_RETRY",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_TIMEOUT",
    "HTTP_METHODS_TO_RETRY",
    "STATUS_CODES_TO_RETRY",
    "RetryConfig",
    "build_retry_config",
]

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from arefetch.core.validation import validate_retry_params, validate_status_ranges

if TYPE_CHECKING:
    from collections.abc import Callable

    from arefetch.exceptions import HttpRequestError


# Default timeout in seconds for HTTP requests
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retry attempts
# Total attempts = retry + 1 (initial attempt)
DEFAULT_RETRY = 3

# Default base delay in milliseconds for exponential backoff
# Wait time = retry_delay * (2 ** (n - 1)) for the n-th retry
# With 100: 1st retry waits 100ms, 2nd waits 200ms, 3rd waits 400ms
DEFAULT_RETRY_DELAY = 100

# Default maximum number of retries for attempts that got no response
DEFAULT_NO_RESPONSE_RETRIES = 2

# Idempotent HTTP methods that are safe to send again
HTTP_METHODS_TO_RETRY = ("GET", "HEAD", "PUT", "OPTIONS", "DELETE")

# Inclusive ranges of HTTP status codes that should trigger automatic retry
# 1xx: Informational responses
# 429: Too Many Requests - Rate limiting
# 5xx: Server errors
STATUS_CODES_TO_RETRY = ((100, 199), (429, 429), (500, 599))


@dataclass
class RetryConfig:
    """Retry policy governing one request.

    The instance attached to an ``HttpRequestError`` is the live
    configuration of the failed call, so ``current_retry_attempt`` tells
    how many retries were actually taken.

    Args:
        retry: Maximum number of retry attempts after the initial attempt.
        retry_delay: Base backoff delay in milliseconds.
        http_methods_to_retry: HTTP methods that may be retried.
        status_codes_to_retry: Inclusive ``(min, max)`` status code ranges
            that trigger a retry.
        no_response_retries: Maximum number of retries for attempts that
            received no response at all.
        current_retry_attempt: Number of retries taken so far.
        should_retry: Optional predicate receiving the failure as an
            ``HttpRequestError``. When set, it replaces the built-in
            method, status and no-response checks.
        on_retry_attempt: Optional callback receiving the failure as an
            ``HttpRequestError`` right before each backoff delay.

    Example:
        ```pycon
        >>> from arefetch.core.config import RetryConfig
        >>> config = RetryConfig()
        >>> config.retry
        3
        >>> config.merge(retry=5).retry
        5
        >>> config.retry
        3

        ```
    """

    retry: int = DEFAULT_RETRY
    retry_delay: int = DEFAULT_RETRY_DELAY
    http_methods_to_retry: tuple[str, ...] = field(default_factory=lambda: HTTP_METHODS_TO_RETRY)
    status_codes_to_retry: tuple[tuple[int, int], ...] = field(
        default_factory=lambda: STATUS_CODES_TO_RETRY
    )
    no_response_retries: int = DEFAULT_NO_RESPONSE_RETRIES
    current_retry_attempt: int = 0
    should_retry: Callable[[HttpRequestError], bool] | None = None
    on_retry_attempt: Callable[[HttpRequestError], None] | None = None

    def __post_init__(self) -> None:
        """Normalize and validate configuration parameters.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(
            retry=self.retry,
            retry_delay=self.retry_delay,
            no_response_retries=self.no_response_retries,
            should_retry=self.should_retry,
            on_retry_attempt=self.on_retry_attempt,
            http_methods_to_retry=self.http_methods_to_retry,
        )
        self.retry = int(self.retry)
        self.http_methods_to_retry = tuple(m.upper() for m in self.http_methods_to_retry)
        self.status_codes_to_retry = tuple(
            (int(low), int(high)) for low, high in _as_pairs(self.status_codes_to_retry)
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied. The original instance
        is left unchanged.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new ``RetryConfig`` instance with overrides applied.

        Raises:
            TypeError: If an override does not name a field.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def is_retryable_status(self, status_code: int) -> bool:
        """Indicate whether a status code falls in one of the configured
        ranges.

        Example:
            ```pycon
            >>> from arefetch.core.config import RetryConfig
            >>> config = RetryConfig()
            >>> config.is_retryable_status(503)
            True
            >>> config.is_retryable_status(404)
            False

            ```
        """
        return any(low <= status_code <= high for low, high in self.status_codes_to_retry)


def _as_pairs(ranges: Any) -> list[tuple[int, int]]:
    validate_status_ranges(ranges)
    return [tuple(status_range) for status_range in ranges]


def build_retry_config(
    retry: bool | None = None,
    retry_config: RetryConfig | Mapping[str, Any] | None = None,
    defaults: RetryConfig | None = None,
) -> RetryConfig:
    """Build the effective retry configuration for one call.

    ``retry=True`` selects the defaults. ``retry=False``, or neither
    argument, disables retrying. A ``retry_config`` alone enables
    retrying with its values on top of the defaults. The result is always
    a new instance with ``current_retry_attempt`` reset to 0.

    Args:
        retry: Boolean shorthand enabling or disabling retries.
        retry_config: A ``RetryConfig`` or a mapping of its field names.
        defaults: The base configuration. Defaults to ``RetryConfig()``.

    Returns:
        A fresh ``RetryConfig`` owned by the call.

    Raises:
        TypeError: If a mapping key does not name a field.
        ValueError: If a merged value fails validation.

    Example:
        ```pycon
        >>> from arefetch.core.config import build_retry_config
        >>> build_retry_config(retry=True).retry
        3
        >>> build_retry_config().retry
        0
        >>> build_retry_config(retry_config={"retry": 5}).retry
        5

        ```
    """
    config = defaults if defaults is not None else RetryConfig()
    if isinstance(retry_config, RetryConfig):
        config = retry_config
    elif retry_config is not None:
        config = config.merge(**retry_config)
    if retry is False or (retry is None and retry_config is None):
        return replace(config, retry=0, current_retry_attempt=0)
    return replace(config, current_retry_attempt=0)
