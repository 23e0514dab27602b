import io

import pytest
from PIL import Image

from conftest import make_location
from coworks.api.routes import images


def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGBA", (8, 8), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def uploads(monkeypatch):
    calls = []

    def fake_upload(image_bytes, folder):
        calls.append((image_bytes, folder))
        return {"url": "https://res.cloudinary.com/demo/coworks/cover.jpg", "public_id": "coworks/cover"}

    monkeypatch.setattr(images, "upload_image", fake_upload)
    return calls


def test_upload_location_cover(client, db, admin_headers, uploads):
    location = make_location(db)

    res = client.post(
        f"/admin/images/locations/{location.id}",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        headers=admin_headers,
    )

    assert res.status_code == 200
    assert res.json()["image_url"] == "https://res.cloudinary.com/demo/coworks/cover.jpg"

    sent, folder = uploads[0]
    assert folder == "coworks/locations"
    assert sent[:3] == b"\xff\xd8\xff"  # JPEG magic

    db.refresh(location)
    assert location.image_url.endswith("cover.jpg")


def test_rejects_unsupported_type(client, db, admin_headers, uploads):
    location = make_location(db)

    res = client.post(
        f"/admin/images/locations/{location.id}",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )

    assert res.status_code == 400
    assert uploads == []


def test_rejects_broken_image(client, db, admin_headers, uploads):
    location = make_location(db)

    res = client.post(
        f"/admin/images/locations/{location.id}",
        files={"file": ("cover.png", b"not really a png", "image/png")},
        headers=admin_headers,
    )

    assert res.status_code == 400


def test_unknown_target_or_item(client, admin_headers, uploads):
    files = {"file": ("cover.png", png_bytes(), "image/png")}

    assert client.post("/admin/images/rooms/1", files=files, headers=admin_headers).status_code == 404
    assert client.post("/admin/images/spaces/99", files=files, headers=admin_headers).status_code == 404
