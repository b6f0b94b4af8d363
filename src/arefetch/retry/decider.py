r"""Retry decision logic for determining whether to retry requests.

This module provides the RetryDecider class that decides, after a failed
attempt, whether the request should be sent again.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arefetch.exceptions import HttpRequestError

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    The decision reads the live configuration attached to the failure
    (``error.config``). The overall ``retry`` budget always applies; a
    ``should_retry`` predicate, when configured, replaces every other
    check.
    """

    def should_retry(
        self, error: HttpRequestError, no_response_attempts: int = 0
    ) -> tuple[bool, str]:
        """Determine if a failed attempt should trigger a retry.

        Args:
            error: The failure of the last attempt, carrying the request
                and the retry configuration.
            no_response_attempts: Number of retries already taken for
                attempts that received no response.

        Returns:
            Tuple of (should_retry, reason).
        """
        config = error.config
        if config is None or config.current_retry_attempt >= config.retry:
            return (False, "retry budget exhausted")

        if config.should_retry is not None:
            result = config.should_retry(error)
            logger.debug(
                f"should_retry returned {result!r} for {error.method} request to {error.url}"
            )
            if result:
                return (True, "should_retry predicate")
            return (False, "should_retry returned False")

        if error.method not in config.http_methods_to_retry:
            return (False, f"method {error.method} is not retried")

        if error.response is None:
            if no_response_attempts >= config.no_response_retries:
                return (False, "no-response retry budget exhausted")
            return (True, f"no response ({error.code})")

        if config.is_retryable_status(error.response.status_code):
            return (True, f"status {error.response.status_code}")
        return (False, f"status {error.response.status_code} is not retried")
