from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_client() -> httpx.Client:
    """Create a mock httpx.Client returning a 200 response."""
    return Mock(spec=httpx.Client, request=Mock(return_value=httpx.Response(200)))


@pytest.fixture
def mock_async_client() -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient returning a 200 response."""
    return Mock(
        spec=httpx.AsyncClient,
        request=AsyncMock(return_value=httpx.Response(200)),
        aclose=AsyncMock(),
    )


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing retry hooks."""
    return Mock()
