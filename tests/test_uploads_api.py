from conftest import API

from app import config
from app.utils.storage import MAX_FILES_PER_REQUEST, MAX_UPLOAD_BYTES


def test_upload_requires_login(client):
    r = client.post(f"{API}/upload", files={"file": ("a.jpg", b"data", "image/jpeg")})
    assert r.status_code == 401


def test_upload_single_file(admin_client, storage):
    r = admin_client.post(
        f"{API}/upload",
        files={"file": ("Menu Card.JPG", b"\xff\xd8jpeg-bytes", "image/jpeg")},
        data={"folder": "menus"},
    )
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["format"] == "jpg"
    assert body["resource_type"] == "image"
    assert body["bytes"] == 12
    assert body["publicId"].startswith(f"{config.UPLOAD_ROOT_FOLDER}/menus/menu-card-")
    assert body["url"] == f"https://res.example.com/upload/{body['publicId']}.jpg"
    assert body["view_url"] == f"https://res.example.com/upload/fl_inline/{body['publicId']}.jpg"
    name = body["publicId"].rsplit("/", 1)[-1]
    assert body["download_url"].startswith(f"https://res.example.com/upload/fl_attachment:{name}.jpg/")

    key = f"upload/{body['publicId']}.jpg"
    assert storage.objects[key] == (b"\xff\xd8jpeg-bytes", "image/jpeg")


def test_upload_pdf_is_raw(admin_client):
    r = admin_client.post(f"{API}/upload", files={"file": ("menu.pdf", b"%PDF-1.4", "application/pdf")})
    body = r.json()
    assert body["resource_type"] == "raw"
    assert body["publicId"].startswith(f"{config.UPLOAD_ROOT_FOLDER}/uploads/menu-")


def test_upload_rejects_missing_unsupported_and_large(admin_client):
    assert admin_client.post(f"{API}/upload", data={"folder": "x"}).status_code == 400

    r = admin_client.post(f"{API}/upload", files={"file": ("run.exe", b"MZ", "application/octet-stream")})
    assert r.status_code == 400
    assert "Unsupported" in r.json()["detail"]

    big = b"0" * (MAX_UPLOAD_BYTES + 1)
    r = admin_client.post(f"{API}/upload", files={"file": ("big.png", big, "image/png")})
    assert r.status_code == 413


def test_upload_multiple(admin_client, storage):
    files = [
        ("files", ("a.png", b"png", "image/png")),
        ("files", ("b.mp4", b"mp4", "video/mp4")),
    ]
    r = admin_client.post(f"{API}/upload/multiple", files=files)
    assert r.status_code == 200
    items = r.json()["items"]
    assert [i["format"] for i in items] == ["png", "mp4"]
    assert items[1]["resource_type"] == "video"
    assert len(storage.objects) == 2


def test_upload_multiple_limit(admin_client):
    files = [("files", (f"{i}.png", b"x", "image/png")) for i in range(MAX_FILES_PER_REQUEST + 1)]
    r = admin_client.post(f"{API}/upload/multiple", files=files)
    assert r.status_code == 400
