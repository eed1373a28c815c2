import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from storefront.catalog.models import CatalogEntry
from storefront.catalog.persistence import MemorySlot
from storefront.catalog.service import CatalogStore
from storefront.config import Settings
from storefront.main import create_app


class CountingSlot(MemorySlot):
    """Memory slot that records how many writes it received."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.writes = 0

    def write(self, data: bytes) -> bool:
        self.writes += 1
        return super().write(data)


class FailingWriteSlot(MemorySlot):
    def write(self, data: bytes) -> bool:
        return False


class BrokenReadSlot(MemorySlot):
    def read(self):
        raise OSError("storage unavailable")


@pytest.fixture
def make_entry():
    """Factory for catalog entries with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> CatalogEntry:
        counter["n"] += 1
        fields = dict(
            id=f"e{counter['n']}",
            model="iPhone 13",
            variant="Standard",
            storage="128GB",
            color="Midnight",
            condition="Good",
            price=500,
            description="",
            images=[],
            inStock=True,
            featured=False,
            createdAt=f"2024-01-01T00:00:{counter['n']:02d}.000Z",
        )
        fields.update(overrides)
        return CatalogEntry(**fields)

    return _make


@pytest.fixture
def slot():
    return CountingSlot()


@pytest.fixture
def store(slot):
    return CatalogStore(slot)


@pytest.fixture(scope="session")
def log_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("logs")


@pytest.fixture
def settings(tmp_path, log_dir):
    return Settings(
        DATA_DIR=tmp_path / "data",
        UPLOAD_DIR=tmp_path / "uploads",
        LOG_DIR=log_dir,
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": "password123"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(10, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()
