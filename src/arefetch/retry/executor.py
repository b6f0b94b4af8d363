r"""Synchronous retry executor for HTTP requests."""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from arefetch.retry.executor_core import BaseRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from arefetch.transport import AttemptOutcome, RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor(BaseRetryExecutor):
    """Executes HTTP requests with automatic retry logic.

    Example:
        ```pycon
        >>> from functools import partial
        >>> import httpx
        >>> from arefetch.core.config import RetryConfig
        >>> from arefetch.retry import RetryExecutor
        >>> from arefetch.transport import RequestDescriptor, send_request
        >>> executor = RetryExecutor(RetryConfig(retry=2))
        >>> with httpx.Client() as client:  # doctest: +SKIP
        ...     response = executor.execute(
        ...         RequestDescriptor("https://api.example.com/data"),
        ...         partial(send_request, client),
        ...     )
        ...

        ```
    """

    def execute(
        self,
        request: RequestDescriptor,
        send: Callable[[RequestDescriptor], AttemptOutcome],
    ) -> httpx.Response:
        """Execute a request with automatic retry logic.

        The same request is sent until an attempt succeeds, a failure is
        not eligible for retry, or the retry budget is exhausted. The
        thread sleeps for the backoff delay between attempts.

        Args:
            request: The request to send on every attempt.
            send: Function performing exactly one attempt.

        Returns:
            The response of the attempt that ended the call.

        Raises:
            HttpRequestError: If the last failure is not retried and has
                no acceptable response.
        """
        while True:
            logger.debug(
                f"{request.method} request to {request.url} "
                f"(attempt {self.config.current_retry_attempt + 1}/{self.config.retry + 1})"
            )
            response = self._resolve(send(request))
            if response is not None:
                return response
            time.sleep(self.strategy.calculate_delay(self.config.current_retry_attempt))
