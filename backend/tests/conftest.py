"""Root conftest - shared repositories, services and image fixtures.

Invariants:
    - Every test gets fresh in-memory repositories (no state leaks between tests)
    - Photos are written under pytest's tmp_path, never the working tree
"""

import io

import pytest
from PIL import Image

from farm_assets.infrastructure.image_store import LocalImageStore
from farm_assets.infrastructure.in_memory_store import (
    InMemoryAreaRepository, InMemoryFarmRepository,
    InMemoryMaterialRepository, InMemoryReservoirRepository,
)
from farm_assets.services.farm_service import FarmService
from farm_assets.services.material_service import MaterialService


def _png(width: int = 4, height: int = 3) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(30, 120, 40)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    """Factory for tiny PNG payloads of a given size."""
    return _png


@pytest.fixture
def png_bytes() -> bytes:
    return _png()


@pytest.fixture
def farm_repo():
    return InMemoryFarmRepository()


@pytest.fixture
def reservoir_repo():
    return InMemoryReservoirRepository()


@pytest.fixture
def area_repo():
    return InMemoryAreaRepository()


@pytest.fixture
def material_repo():
    return InMemoryMaterialRepository()


@pytest.fixture
def image_store(tmp_path):
    return LocalImageStore(str(tmp_path / "areas"))


@pytest.fixture
def farm_service(farm_repo, reservoir_repo, area_repo, image_store):
    return FarmService(
        farm_repo, reservoir_repo, area_repo, image_store, max_photo_bytes=64 * 1024,
    )


@pytest.fixture
def material_service(material_repo):
    return MaterialService(material_repo)
