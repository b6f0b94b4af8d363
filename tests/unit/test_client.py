r"""Unit tests for the synchronous RetryClient."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from arefetch import HttpRequestError, RetryClient, RetryConfig
from tests.helpers import TEST_URL, create_mock_transport


def test_retry_client_default_config() -> None:
    client = RetryClient()
    assert client.config == RetryConfig()


def test_retry_client_custom_config() -> None:
    config = RetryConfig(retry=5)
    assert RetryClient(config=config).config is config


def test_retry_client_invalid_timeout() -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        RetryClient(timeout=-1)


def test_retry_client_outside_context() -> None:
    client = RetryClient()
    with pytest.raises(RuntimeError, match=r"must be used within a context manager"):
        client.get(TEST_URL)


def test_retry_client_closes_on_exit() -> None:
    transport, _ = create_mock_transport([200])
    with RetryClient(transport=transport) as client:
        client.get(TEST_URL)

    with pytest.raises(RuntimeError, match=r"must be used within a context manager"):
        client.get(TEST_URL)


def test_retry_client_retries_by_default(mock_sleep: Mock) -> None:
    transport, requests = create_mock_transport([500, 502, 200])
    with RetryClient(transport=transport) as client:
        response = client.get(TEST_URL)

    assert response.status_code == 200
    assert len(requests) == 3


def test_retry_client_config_is_not_mutated(mock_sleep: Mock) -> None:
    config = RetryConfig(retry=2)
    transport, _ = create_mock_transport([500, 500, 500, 500, 500, 500])
    with RetryClient(config=config, transport=transport) as client:
        for _ in range(2):
            with pytest.raises(HttpRequestError) as exc_info:
                client.get(TEST_URL)
            assert exc_info.value.config.current_retry_attempt == 2

    assert config.current_retry_attempt == 0


def test_retry_client_request_overrides(mock_sleep: Mock) -> None:
    transport, requests = create_mock_transport([500])
    with RetryClient(config=RetryConfig(retry_delay=50), transport=transport) as client:
        with pytest.raises(HttpRequestError) as exc_info:
            client.get(TEST_URL, retry_config={"retry": 0})

    assert exc_info.value.config.retry == 0
    assert exc_info.value.config.retry_delay == 50
    assert len(requests) == 1


def test_retry_client_retry_false(mock_sleep: Mock) -> None:
    transport, requests = create_mock_transport([503])
    with RetryClient(transport=transport) as client, pytest.raises(HttpRequestError):
        client.get(TEST_URL, retry=False)

    assert len(requests) == 1
    mock_sleep.assert_not_called()


def test_retry_client_post_not_retried(mock_sleep: Mock) -> None:
    transport, requests = create_mock_transport([500])
    with RetryClient(transport=transport) as client, pytest.raises(HttpRequestError):
        client.post(TEST_URL, json={"key": "value"})

    assert len(requests) == 1


def test_retry_client_post_retried_when_configured(mock_sleep: Mock) -> None:
    transport, requests = create_mock_transport([500, 201])
    with RetryClient(
        config=RetryConfig(http_methods_to_retry=("POST",)), transport=transport
    ) as client:
        response = client.post(TEST_URL, json={"key": "value"})

    assert response.status_code == 201
    assert len(requests) == 2


@pytest.mark.parametrize(
    ("name", "method"),
    [
        ("get", "GET"),
        ("head", "HEAD"),
        ("options", "OPTIONS"),
        ("put", "PUT"),
        ("delete", "DELETE"),
        ("post", "POST"),
        ("patch", "PATCH"),
    ],
)
def test_retry_client_verb_helpers(name: str, method: str) -> None:
    transport, requests = create_mock_transport([200])
    with RetryClient(transport=transport) as client:
        response = getattr(client, name)(TEST_URL)

    assert response.status_code == 200
    assert requests[0].method == method


def test_retry_client_forwards_client_kwargs() -> None:
    transport, requests = create_mock_transport([200])
    with RetryClient(headers={"X-Client": "arefetch"}, transport=transport) as client:
        client.get(TEST_URL, params={"q": "1"})

    assert requests[0].headers["X-Client"] == "arefetch"
    assert requests[0].url.params["q"] == "1"
