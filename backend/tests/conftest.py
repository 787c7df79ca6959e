"""
CargoSnap Proxy — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_upstream: AsyncMock replacing CargoSnapClient.request (route tests)
    ├── upstream_client: real CargoSnapClient aimed at a fake base URL (pytest-httpx)
    └── test_client: HTTPX AsyncClient talking to a fresh app over ASGI
"""

import os
import tempfile

# Override settings for testing BEFORE any application imports
os.environ["CARGOSNAP_URL"] = "https://api.cargosnap.test/api/v2"
os.environ["CARGOSNAP_API_KEY"] = "test-token-not-real"
os.environ["CARGOSNAP_AUTH_MODE"] = "bearer"
os.environ["PROPAGATE_UPSTREAM_STATUS"] = "false"
os.environ["API_PREFIX"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
# Point static mounts at directories that do not exist
_scratch = tempfile.mkdtemp(prefix="cargosnap_test_")
os.environ["PUBLIC_DIR"] = os.path.join(_scratch, "public")
os.environ["APIDOC_DIR"] = os.path.join(_scratch, "apidoc")

from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from cargosnap_proxy.services.cargosnap_client import CargoSnapClient, cargosnap_client  # noqa: E402

UPSTREAM_URL = "https://api.cargosnap.test/api/v2"
UPSTREAM_TOKEN = "test-token-not-real"


@pytest.fixture
def mock_upstream():
    """
    Replaces the shared upstream client's request method with an AsyncMock.

    Usage:
        async def test_get_file(test_client, mock_upstream):
            mock_upstream.return_value = {"id": "1"}
            await test_client.get("/files/1")
            mock_upstream.assert_awaited_once_with("/files/1", "GET")
    """
    with patch.object(cargosnap_client, "request", new_callable=AsyncMock) as mock_request:
        yield mock_request


@pytest.fixture
def upstream_client():
    """A CargoSnapClient using bearer auth against the fake upstream URL."""
    return CargoSnapClient(base_url=UPSTREAM_URL, api_key=UPSTREAM_TOKEN, auth_mode="bearer")


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    raise_app_exceptions=False lets the last-resort error handler's response reach
    the test instead of the re-raised exception.
    """
    from cargosnap_proxy.main import create_app

    transport = ASGITransport(app=create_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
