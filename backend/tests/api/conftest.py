"""API test fixtures - FastAPI test client over fresh in-memory services.

Invariants:
    - get_farm_service / get_material_service overridden per test
    - Overrides cleared after each test

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so init_services() is
      never called and nothing is written outside tmp_path
"""

import pytest
from httpx import ASGITransport, AsyncClient

from farm_assets.api.dependencies import get_farm_service, get_material_service
from farm_assets.main import app


@pytest.fixture
async def client(farm_service, material_service):
    """FastAPI test client with service dependencies overridden."""
    app.dependency_overrides[get_farm_service] = lambda: farm_service
    app.dependency_overrides[get_material_service] = lambda: material_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def farm_id(client) -> str:
    res = await client.post("/api/v1/farms", data={
        "name": "F1", "farm_type": "organic", "latitude": "-6.2",
        "longitude": "106.8", "country_code": "ID", "city_code": "JK",
    })
    assert res.status_code == 201
    return res.json()["data"]["uid"]
