r"""Single-attempt request execution on top of httpx.

This module sends exactly one HTTP request and normalizes the result into
an ``AttemptOutcome``: either the response, whatever its status code, or
the transport error that prevented any response from being received.
It never retries and never sleeps.
"""

from __future__ import annotations

__all__ = [
    "NO_RESPONSE_ERRORS",
    "AttemptOutcome",
    "RequestDescriptor",
    "get_error_code",
    "send_request",
    "send_request_async",
]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from arefetch.core.validation import validate_method, validate_url

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger(__name__)

# Transport failures that happen before any response is received
NO_RESPONSE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.ProtocolError,
    httpx.ProxyError,
)

_NAME_RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "name resolution",
    "no address associated",
)


@dataclass(frozen=True)
class RequestDescriptor:
    """Description of the request sent on every attempt.

    The body and header fields are passed through to httpx unchanged.

    Args:
        url: The absolute URL to send the request to.
        method: The HTTP method, upper-cased on creation.
        headers: Optional request headers.
        params: Optional query parameters.
        content: Optional raw request body.
        data: Optional form data.
        json: Optional JSON-serializable body.

    Raises:
        ValueError: If the URL is not an absolute http or https URL or if
            the method is not a standard HTTP verb.

    Example:
        ```pycon
        >>> from arefetch.transport import RequestDescriptor
        >>> RequestDescriptor("https://example.com", method="get").method
        'GET'

        ```
    """

    url: str
    method: str = "GET"
    headers: Mapping[str, str] | None = None
    params: Mapping[str, Any] | None = None
    content: str | bytes | None = None
    data: Mapping[str, Any] | None = None
    json: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        validate_url(self.url)
        validate_method(self.method)

    def to_kwargs(self) -> dict[str, Any]:
        """Return the keyword arguments for ``httpx.Client.request``.

        Fields left to ``None`` are omitted.
        """
        kwargs = {
            "headers": self.headers,
            "params": self.params,
            "content": self.content,
            "data": self.data,
            "json": self.json,
        }
        return {k: v for k, v in kwargs.items() if v is not None}


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of one attempt.

    Exactly one of ``response`` and ``error`` is set.

    Args:
        request: The request that was sent.
        response: The received response, whatever its status code.
        error: The transport exception when no response was received.
        code: The machine-readable code of ``error``.
    """

    request: RequestDescriptor
    response: httpx.Response | None = None
    error: Exception | None = None
    code: str | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            msg = "exactly one of response and error must be set"
            raise ValueError(msg)

    @property
    def status_code(self) -> int | None:
        return None if self.response is None else self.response.status_code


def get_error_code(exc: Exception) -> str:
    """Map an httpx transport exception to a machine-readable error code.

    Args:
        exc: The transport exception.

    Returns:
        The error code, e.g. ``"ETIMEDOUT"`` or ``"ENOTFOUND"``.

    Example:
        ```pycon
        >>> import httpx
        >>> from arefetch.transport import get_error_code
        >>> get_error_code(httpx.ConnectTimeout("timed out"))
        'ETIMEDOUT'
        >>> get_error_code(httpx.ConnectError("[Errno -2] Name or service not known"))
        'ENOTFOUND'

        ```
    """
    if isinstance(exc, httpx.TimeoutException):
        return "ETIMEDOUT"
    if isinstance(exc, httpx.ConnectError):
        message = str(exc).lower()
        if any(marker in message for marker in _NAME_RESOLUTION_MARKERS):
            return "ENOTFOUND"
        return "ECONNREFUSED"
    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError)):
        return "ECONNRESET"
    if isinstance(exc, httpx.LocalProtocolError):
        return "EPROTO"
    if isinstance(exc, httpx.ProxyError):
        return "EPROXY"
    return "ENETWORK"


def _no_response_outcome(request: RequestDescriptor, exc: Exception) -> AttemptOutcome:
    code = get_error_code(exc)
    logger.debug(
        f"{request.method} request to {request.url} got no response "
        f"({code}, {type(exc).__name__}): {exc}"
    )
    return AttemptOutcome(request=request, error=exc, code=code)


def send_request(client: httpx.Client, request: RequestDescriptor) -> AttemptOutcome:
    """Send one request with a synchronous httpx client.

    Args:
        client: The httpx client used to send the request.
        request: The request to send.

    Returns:
        The outcome of the attempt.

    Raises:
        httpx.HTTPError: For httpx errors that are not a missing
            response, e.g. ``httpx.TooManyRedirects``.
    """
    try:
        response = client.request(request.method, request.url, **request.to_kwargs())
    except NO_RESPONSE_ERRORS as exc:
        return _no_response_outcome(request, exc)
    logger.debug(f"{request.method} request to {request.url} returned {response.status_code}")
    return AttemptOutcome(request=request, response=response)


async def send_request_async(
    client: httpx.AsyncClient, request: RequestDescriptor
) -> AttemptOutcome:
    """Send one request with an asynchronous httpx client.

    Args:
        client: The httpx client used to send the request.
        request: The request to send.

    Returns:
        The outcome of the attempt.

    Raises:
        httpx.HTTPError: For httpx errors that are not a missing
            response, e.g. ``httpx.TooManyRedirects``.
    """
    try:
        response = await client.request(request.method, request.url, **request.to_kwargs())
    except NO_RESPONSE_ERRORS as exc:
        return _no_response_outcome(request, exc)
    logger.debug(f"{request.method} request to {request.url} returned {response.status_code}")
    return AttemptOutcome(request=request, response=response)
