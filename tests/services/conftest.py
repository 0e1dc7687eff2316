"""Service test fixtures: FastAPI test client over ASGI.

Invariants:
    - Every test gets a fresh AsyncClient bound to the application
    - dependency_overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from refinery.main import app


@pytest.fixture
async def client():
    """FastAPI test client; tests may install dependency overrides before requests."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
