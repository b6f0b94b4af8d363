r"""Define the exceptions raised by arefetch."""

from __future__ import annotations

__all__ = ["HttpRequestError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from arefetch.core.config import RetryConfig
    from arefetch.transport import RequestDescriptor


class HttpRequestError(RuntimeError):
    """Raised when an HTTP request fails for good.

    The error carries the last failure, either a response with its status
    code or a transport error code, together with the final retry
    configuration. ``config.current_retry_attempt`` tells how many retries
    were taken before giving up, 0 when the failure was never eligible.

    The same object is handed to the ``should_retry`` and
    ``on_retry_attempt`` hooks while the request is still being retried.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: The error message.
        status_code: The status code of the last response, if any.
        response: The last response, if any.
        code: The machine-readable transport error code when no response
            was received (e.g. ``"ETIMEDOUT"``).
        config: The retry configuration of the call.
        request: The description of the request that was sent.
        cause: The underlying transport exception, if any.

    Example:
        ```pycon
        >>> from arefetch import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://example.com",
        ...     message="GET request to https://example.com failed with status 503",
        ...     status_code=503,
        ... )
        >>> error.status_code
        503

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        *,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        code: str | None = None,
        config: RetryConfig | None = None,
        request: RequestDescriptor | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.code = code
        self.config = config
        self.request = request
        self.cause = cause

    @property
    def has_response(self) -> bool:
        """``True`` if the failure carries an HTTP response."""
        return self.response is not None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r}, code={self.code!r})"
        )
