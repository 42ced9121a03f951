"""Upload Route — multipart image storage with collision-free names.

Invariants:
    - Same original name uploaded twice → two files, two URLs, no overwrite
    - Returned URL serves the stored bytes
    - Missing file → 400; unwritable store → 500
"""

import re

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


async def _upload(client, filename="photo.png", content=PNG_BYTES):
    return await client.post(
        "/api/upload-image",
        files={"image": (filename, content, "image/png")},
    )


async def test_upload_returns_public_url(client, settings):
    res = await _upload(client)

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert re.fullmatch(r"/uploads/photo-\d+-\d+\.png", body["image_url"])
    stored = settings.upload_dir / body["image_url"].rsplit("/", 1)[1]
    assert stored.read_bytes() == PNG_BYTES


async def test_same_name_twice_yields_distinct_files(client, settings):
    first = (await _upload(client, content=b"first")).json()["image_url"]
    second = (await _upload(client, content=b"second")).json()["image_url"]

    assert first != second
    assert sorted(p.read_bytes() for p in settings.upload_dir.iterdir()) == [
        b"first", b"second",
    ]


async def test_uploaded_file_is_served(client):
    url = (await _upload(client)).json()["image_url"]

    res = await client.get(url)

    assert res.status_code == 200
    assert res.content == PNG_BYTES


async def test_missing_upload_is_404(client):
    res = await client.get("/uploads/nothing-here.png")
    assert res.status_code == 404


async def test_directory_components_are_dropped(client, settings):
    res = await _upload(client, filename="../../escape.png")

    name = res.json()["image_url"].rsplit("/", 1)[1]
    assert name.startswith("escape-")
    assert (settings.upload_dir / name).is_file()


async def test_missing_file_returns_400(client):
    res = await client.post("/api/upload-image", data={"other": "field"})

    assert res.status_code == 400
    assert res.json() == {"error": "image is required", "code": "MISSING_FIELD"}


async def test_unwritable_store_returns_500(client, context, tmp_path):
    context.file_store.root = tmp_path / "does-not-exist"

    res = await _upload(client)

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to upload image", "code": "INTERNAL_ERROR"}
