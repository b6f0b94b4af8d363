r"""Shared test helpers for retry tests.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "create_mock_transport",
    "make_outcome",
]

from typing import TYPE_CHECKING

import httpx

from arefetch.transport import AttemptOutcome, RequestDescriptor, get_error_code

if TYPE_CHECKING:
    from collections.abc import Iterable

TEST_URL = "https://api.example.com/data"


def make_outcome(
    status_code: int | None = None,
    *,
    error: Exception | None = None,
    method: str = "GET",
    request: RequestDescriptor | None = None,
) -> AttemptOutcome:
    """Create the outcome of one attempt.

    Args:
        status_code: The status code of the response. Ignored if
            ``error`` is set.
        error: The transport exception of a no-response failure.
        method: The HTTP method of the request.
        request: The request. Defaults to ``method`` on ``TEST_URL``.

    Returns:
        The attempt outcome.
    """
    if request is None:
        request = RequestDescriptor(TEST_URL, method=method)
    if error is not None:
        return AttemptOutcome(request=request, error=error, code=get_error_code(error))
    return AttemptOutcome(request=request, response=httpx.Response(status_code or 200))


def create_mock_transport(
    side_effect: Iterable[int | httpx.Response | Exception],
) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    """Create an httpx.MockTransport replaying a sequence of results.

    Each element is used for one request: an ``int`` becomes an empty
    response with that status code, a response is returned as-is and an
    exception is raised.

    Args:
        side_effect: The results to replay, in order.

    Returns:
        A tuple of (transport, requests) where ``requests`` collects every
        request received by the transport.

    Example:
        >>> transport, requests = create_mock_transport([500, 200])
        >>> with httpx.Client(transport=transport) as client:
        ...     client.get(TEST_URL).status_code
        500
    """
    results = list(side_effect)
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) > len(results):
            msg = f"unexpected request #{len(requests)} to {request.url}"
            raise AssertionError(msg)
        result = results[len(requests) - 1]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, int):
            return httpx.Response(result)
        return result

    return httpx.MockTransport(handler), requests
