"""Local File Store — stored-name format and exclusive writes."""

import io
import re

import pytest

from placeboard.core.errors import FileStorageError
from placeboard.infrastructure.file_store import LocalFileStore, build_stored_name


class _AsyncBytes:
    """Minimal async-readable source standing in for an UploadFile."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buf.read(size)


def test_stored_name_format():
    assert re.fullmatch(r"menu-\d{13,}-\d{1,9}\.jpg", build_stored_name("menu.jpg"))


def test_stored_name_without_extension():
    assert re.fullmatch(r"README-\d+-\d+", build_stored_name("README"))


@pytest.mark.parametrize("original", ["../../etc/passwd.png", "C:\\Users\\me\\passwd.png"])
def test_stored_name_drops_directories(original):
    name = build_stored_name(original)
    assert name.startswith("passwd-")
    assert "/" not in name and "\\" not in name


def test_names_do_not_collide():
    names = {build_stored_name("same.png") for _ in range(200)}
    assert len(names) == 200


async def test_save_writes_bytes_in_chunks(tmp_path):
    store = LocalFileStore(tmp_path)
    data = b"x" * (3 * 1024 * 1024 + 17)

    name = await store.save("big.bin", _AsyncBytes(data))

    assert (tmp_path / name).read_bytes() == data
    assert store.url_for(name) == f"/uploads/{name}"


async def test_save_into_missing_directory_raises(tmp_path):
    store = LocalFileStore(tmp_path / "gone")

    with pytest.raises(FileStorageError) as exc:
        await store.save("a.png", _AsyncBytes(b"a"))
    assert exc.value.filename == "a.png"


def test_ensure_root_creates_nested_directory(tmp_path):
    store = LocalFileStore(tmp_path / "a" / "b")
    store.ensure_root()
    assert (tmp_path / "a" / "b").is_dir()


class _FailingSource:
    """Yields one chunk, then fails the way a full disk or dropped stream would."""

    def __init__(self):
        self._sent = False

    async def read(self, size: int = -1) -> bytes:
        if self._sent:
            raise OSError(28, "No space left on device")
        self._sent = True
        return b"partial"


async def test_failed_write_removes_partial_file(tmp_path):
    store = LocalFileStore(tmp_path)

    with pytest.raises(FileStorageError):
        await store.save("half.png", _FailingSource())

    assert list(tmp_path.iterdir()) == []


async def test_name_collision_keeps_existing_file(tmp_path, monkeypatch):
    existing = tmp_path / "taken.png"
    existing.write_bytes(b"original")
    monkeypatch.setattr(
        "placeboard.infrastructure.file_store.build_stored_name", lambda _: "taken.png",
    )
    store = LocalFileStore(tmp_path)

    with pytest.raises(FileStorageError):
        await store.save("taken.png", _AsyncBytes(b"new"))

    assert existing.read_bytes() == b"original"
