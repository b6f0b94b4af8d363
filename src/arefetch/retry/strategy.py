r"""Retry strategy for calculating backoff delays.

This module provides the RetryStrategy class for calculating retry
delays.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Exponential backoff between retry attempts.

    The delay before retry ``n`` (1-indexed) is
    ``retry_delay * (2 ** (n - 1))`` milliseconds.

    Args:
        retry_delay: Base delay in milliseconds. Must be >= 0.

    Example:
        ```pycon
        >>> from arefetch.retry import RetryStrategy
        >>> strategy = RetryStrategy(retry_delay=100)
        >>> strategy.calculate_delay(1)
        0.1
        >>> strategy.calculate_delay(2)
        0.2
        >>> strategy.calculate_delay(3)
        0.4

        ```
    """

    def __init__(self, retry_delay: int) -> None:
        if retry_delay < 0:
            msg = f"retry_delay must be non-negative, got {retry_delay}"
            raise ValueError(msg)
        self.retry_delay = retry_delay

    def calculate_delay_ms(self, attempt: int) -> int:
        """Calculate the delay in milliseconds before a retry.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            The delay in milliseconds.
        """
        if attempt < 1:
            msg = f"attempt must be >= 1, got {attempt}"
            raise ValueError(msg)
        return self.retry_delay * (2 ** (attempt - 1))

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay in seconds before a retry.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            The delay in seconds, suitable for ``time.sleep`` or
            ``asyncio.sleep``.
        """
        delay = self.calculate_delay_ms(attempt) / 1000
        logger.debug(f"Waiting {delay:.3f}s before retry {attempt}")
        return delay
