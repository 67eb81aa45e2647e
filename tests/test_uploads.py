from neropage.platform.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_image_and_serve_it(client, alice):
    response = client.post(
        "/api/upload-image",
        files={"file": ("avatar.png", PNG_BYTES, "image/png")},
        headers=alice["mutate"],
    )
    assert response.status_code == 200, response.text
    url = response.json()["url"]
    assert url.startswith("/static/uploads/images/")
    assert url.endswith(".png")

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_upload_video(client, alice):
    response = client.post(
        "/api/upload-video",
        files={"file": ("clip.mov", b"fake-mov-bytes", "video/quicktime")},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    assert response.json()["url"].endswith(".mov")


def test_upload_rejects_wrong_type(client, alice):
    response = client.post(
        "/api/upload-image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=alice["mutate"],
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid file type")


def test_upload_rejects_oversized_file(client, alice, monkeypatch):
    monkeypatch.setattr(settings, "MAX_IMAGE_SIZE", 16)

    response = client.post(
        "/api/upload-image",
        files={"file": ("big.png", PNG_BYTES, "image/png")},
        headers=alice["mutate"],
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large")


def test_upload_rejects_empty_file(client, alice):
    response = client.post(
        "/api/upload-image",
        files={"file": ("empty.png", b"", "image/png")},
        headers=alice["mutate"],
    )
    assert response.status_code == 400


def test_upload_requires_csrf_token(client, alice):
    response = client.post(
        "/api/upload-image",
        files={"file": ("avatar.png", PNG_BYTES, "image/png")},
        headers=alice["headers"],
    )
    assert response.status_code == 403
