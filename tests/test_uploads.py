import pytest
from fastapi.testclient import TestClient

from storefront.main import create_app
from storefront.uploads.service import _format_limit


def test_upload_returns_public_url(client, settings, png_bytes):
    resp = client.post("/api/upload-image", files={"image": ("Front View.png", png_bytes, "image/png")})

    assert resp.status_code == 200
    url = resp.json()["url"]
    assert url.startswith("/uploads/")
    assert url.endswith("-Front-View.png")

    stored = settings.UPLOAD_DIR / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == png_bytes

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == png_bytes


def test_missing_image_field(client):
    resp = client.post("/api/upload-image", files={"other": ("a.png", b"x", "image/png")})

    assert resp.status_code == 400
    assert resp.json() == {"message": "No image provided"}


def test_non_image_rejected(client):
    resp = client.post("/api/upload-image", files={"image": ("notes.txt", b"hello there", "text/plain")})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Uploaded file is not a valid image"


def test_wrong_method(client):
    resp = client.get("/api/upload-image")

    assert resp.status_code == 405
    assert resp.json() == {"message": "Method not allowed"}


def test_limit_message_format(settings):
    assert _format_limit(settings.MAX_UPLOAD_BYTES) == "10MB"
    assert _format_limit(64) == "64 bytes"


@pytest.fixture
def small_limit_client(settings):
    limited = settings.model_copy(update={"MAX_UPLOAD_BYTES": 64})
    with TestClient(create_app(limited)) as c:
        yield c


def test_oversized_upload_rejected(small_limit_client, settings, png_bytes):
    payload = png_bytes + b"\0" * 128

    resp = small_limit_client.post("/api/upload-image", files={"image": ("big.png", payload, "image/png")})

    assert resp.status_code == 413
    assert resp.json()["message"].startswith("File too large")
    assert not any(settings.UPLOAD_DIR.iterdir())


def test_upload_then_attach(admin_client, png_bytes):
    url = admin_client.post("/api/upload-image", files={"image": ("back.png", png_bytes, "image/png")}).json()["url"]

    entry = admin_client.post("/api/products/3/images", json={"url": url}).json()

    assert entry["images"][-1] == url
