r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class. Backoff delays use
``asyncio.sleep``, so only the task making the request is suspended
while other tasks keep running.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING

from arefetch.retry.executor_core import BaseRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from arefetch.transport import AttemptOutcome, RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor(BaseRetryExecutor):
    """Executes async HTTP requests with automatic retry logic.

    At most one attempt is in flight at a time. The ``should_retry`` and
    ``on_retry_attempt`` hooks are invoked synchronously and should be
    fast operations.

    Example:
        ```pycon
        >>> import asyncio
        >>> from functools import partial
        >>> import httpx
        >>> from arefetch.core.config import RetryConfig
        >>> from arefetch.retry import AsyncRetryExecutor
        >>> from arefetch.transport import RequestDescriptor, send_request_async
        >>> async def main():
        ...     executor = AsyncRetryExecutor(RetryConfig(retry=2))
        ...     async with httpx.AsyncClient() as client:
        ...         return await executor.execute(
        ...             RequestDescriptor("https://api.example.com/data"),
        ...             partial(send_request_async, client),
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    async def execute(
        self,
        request: RequestDescriptor,
        send: Callable[[RequestDescriptor], Awaitable[AttemptOutcome]],
    ) -> httpx.Response:
        """Execute an async request with automatic retry logic.

        Args:
            request: The request to send on every attempt.
            send: Coroutine function performing exactly one attempt.

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
            response = self._resolve(await send(request))
            if response is not None:
                return response
            await asyncio.sleep(self.strategy.calculate_delay(self.config.current_retry_attempt))
