"""
Inventory Service — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own cache directory and a freshly built app, so
       the in-memory inventory and id counter start from scratch.

Fixtures:
    ├── cache_dir: Temporary cache directory for photo files
    ├── settings: Settings pointing at cache_dir
    ├── app: FastAPI app from create_app(settings)
    ├── test_client: HTTPX AsyncClient talking to the app over ASGI
    ├── sample_image_bytes / other_image_bytes: Tiny image payloads
    └── register_item: Helper posting to /register
"""

import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Keep test output quiet; set before the app module builds its default settings
os.environ.setdefault("LOG_LEVEL", "WARNING")

from inventory_service.config import Settings  # noqa: E402
from inventory_service.main import create_app  # noqa: E402


@pytest.fixture
def cache_dir(tmp_path):
    """A fresh, empty cache directory for each test."""
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(cache_dir):
    return Settings(
        host="127.0.0.1",
        port=3000,
        cache_dir=str(cache_dir),
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app via ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/inventory")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_image_bytes():
    """Smallest valid JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def other_image_bytes():
    """PNG signature plus a few bytes; content only needs to differ from the JPEG."""
    return b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR-second-photo'


@pytest.fixture
def register_item(test_client):
    """
    Returns a coroutine function that registers an item and returns the response.

    Usage:
        response = await register_item("Drill", description="Cordless", photo=b"...")
    """

    async def _register(name, description=None, photo=None, filename="photo.jpg"):
        data = {"inventory_name": name}
        if description is not None:
            data["description"] = description
        files = None
        if photo is not None:
            files = {"photo": (filename, photo, "image/jpeg")}
        return await test_client.post("/register", data=data, files=files)

    return _register
