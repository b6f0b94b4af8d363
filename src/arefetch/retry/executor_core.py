r"""Shared core logic for retry executors.

This module provides the state shared by the synchronous and
asynchronous retry executors: classifying an attempt, asking the decider
whether to retry, updating the retry counters and building the final
error. The executors only add the send and wait steps.
"""

from __future__ import annotations

__all__ = ["BaseRetryExecutor", "create_attempt_error", "default_validate_status"]

import logging
from typing import TYPE_CHECKING

from arefetch.exceptions import HttpRequestError
from arefetch.retry.decider import RetryDecider
from arefetch.retry.strategy import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from arefetch.core.config import RetryConfig
    from arefetch.transport import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)


def default_validate_status(status_code: int) -> bool:
    """Accept 2xx and 3xx status codes."""
    return 200 <= status_code < 400


def create_attempt_error(outcome: AttemptOutcome, config: RetryConfig) -> HttpRequestError:
    """Create the HttpRequestError describing a failed attempt.

    Args:
        outcome: The outcome of the failed attempt.
        config: The live retry configuration of the call.

    Returns:
        The error, attached to ``config``.
    """
    request = outcome.request
    attempts = config.current_retry_attempt + 1
    tried = f"{attempts} attempt" if attempts == 1 else f"{attempts} attempts"
    if outcome.response is not None:
        message = (
            f"{request.method} request to {request.url} failed with status "
            f"{outcome.response.status_code} after {tried}"
        )
    else:
        message = (
            f"{request.method} request to {request.url} failed after {tried} "
            f"({outcome.code}): {outcome.error}"
        )
    return HttpRequestError(
        method=request.method,
        url=request.url,
        message=message,
        status_code=outcome.status_code,
        response=outcome.response,
        code=outcome.code,
        config=config,
        request=request,
        cause=outcome.error,
    )


class BaseRetryExecutor:
    """Retry state machine shared by the sync and async executors.

    An executor owns the configuration of a single call and must not be
    shared between calls.

    Args:
        config: The retry configuration of the call. Its
            ``current_retry_attempt`` is updated in place.
        validate_status: Predicate telling whether a response status is
            acceptable to the caller. Defaults to accepting 2xx and 3xx.

    Attributes:
        config: The retry configuration of the call.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        validate_status: Predicate for acceptable status codes.
    """

    def __init__(
        self,
        config: RetryConfig,
        validate_status: Callable[[int], bool] | None = None,
    ) -> None:
        self.config = config
        self.strategy: RetryStrategy = RetryStrategy(config.retry_delay)
        self.decider: RetryDecider = RetryDecider()
        self.validate_status = (
            validate_status if validate_status is not None else default_validate_status
        )
        self._no_response_attempts = 0

    def _is_failure(self, outcome: AttemptOutcome) -> bool:
        if outcome.response is None:
            return True
        status_code = outcome.response.status_code
        return self.config.is_retryable_status(status_code) or not self.validate_status(
            status_code
        )

    def _resolve(self, outcome: AttemptOutcome) -> httpx.Response | None:
        """Process the outcome of an attempt.

        Args:
            outcome: The outcome of the last attempt.

        Returns:
            The response that ends the call, or ``None`` if the request
            has to be retried. In that case the retry counter has been
            incremented and ``on_retry_attempt`` has been invoked.

        Raises:
            HttpRequestError: If the attempt failed and is not retried.
        """
        request = outcome.request
        if not self._is_failure(outcome):
            return outcome.response

        error = create_attempt_error(outcome, self.config)
        should_retry, reason = self.decider.should_retry(error, self._no_response_attempts)
        if not should_retry:
            logger.debug(f"{request.method} to {request.url}: not retrying ({reason})")
            if outcome.response is not None and self.validate_status(
                outcome.response.status_code
            ):
                return outcome.response
            if outcome.error is not None:
                raise error from outcome.error
            raise error

        self.config.current_retry_attempt += 1
        if outcome.response is None:
            self._no_response_attempts += 1
        logger.debug(
            f"{request.method} to {request.url}: will retry "
            f"{self.config.current_retry_attempt}/{self.config.retry} ({reason})"
        )
        if self.config.on_retry_attempt is not None:
            self.config.on_retry_attempt(error)
        return None
