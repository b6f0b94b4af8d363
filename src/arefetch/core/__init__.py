r"""Core configuration and validation shared by sync and async
requests."""

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
    "validate_method",
    "validate_retry_params",
    "validate_status_ranges",
    "validate_timeout",
    "validate_url",
]

from arefetch.core.config import (
    DEFAULT_NO_RESPONSE_RETRIES,
    DEFAULT_RETRY,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    HTTP_METHODS_TO_RETRY,
    STATUS_CODES_TO_RETRY,
    RetryConfig,
    build_retry_config,
)
from arefetch.core.validation import (
    validate_method,
    validate_retry_params,
    validate_status_ranges,
    validate_timeout,
    validate_url,
)
