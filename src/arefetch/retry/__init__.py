r"""Retry package implementing the retry controller.

Public API:
    - RetryDecider: Logic for deciding whether to retry
    - RetryStrategy: Exponential backoff delays
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "RetryDecider",
    "RetryExecutor",
    "RetryStrategy",
]

from arefetch.retry.decider import RetryDecider
from arefetch.retry.executor import RetryExecutor
from arefetch.retry.executor_async import AsyncRetryExecutor
from arefetch.retry.strategy import RetryStrategy
