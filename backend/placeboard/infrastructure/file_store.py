"""Local File Store — writes uploaded images under a single directory served at /uploads.

Invariants:
    - Stored names follow {base}-{epoch_ms}-{random}{ext}; two uploads never share a name
    - Only the base name of the client filename is used (directory parts dropped)
    - Existing files are never overwritten (exclusive-create mode)
    - A write that fails partway leaves no file behind

Design Decisions:
    - aiofiles for the write: keeps the event loop free during disk I/O
    - No type/size checks: the store accepts whatever bytes it is handed
"""

import logging
import os
import random
import time
from pathlib import Path

import aiofiles

from placeboard.core.errors import FileStorageError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024
_RANDOM_SUFFIX_LIMIT = 1_000_000_000


def build_stored_name(original_filename: str) -> str:
    """Derive a collision-resistant on-disk name from the client filename."""
    name = os.path.basename(original_filename.replace("\\", "/"))
    base, ext = os.path.splitext(name)
    unique = f"{int(time.time() * 1000)}-{random.randrange(_RANDOM_SUFFIX_LIMIT)}"
    return f"{base}-{unique}{ext}"


class LocalFileStore:
    """Append-only directory of uploaded files with a public URL prefix."""

    def __init__(self, root: Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def url_for(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}"

    async def save(self, original_filename: str, source) -> str:
        """Copy an async-readable upload into the store. Returns the stored name.

        source must expose `async read(size)` (Starlette UploadFile does).
        """
        stored_name = build_stored_name(original_filename)
        target = self.root / stored_name
        created = False
        try:
            async with aiofiles.open(target, "xb") as out:
                created = True
                while True:
                    chunk = await source.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    await out.write(chunk)
        except OSError as e:
            # Only a file this call created is removed; "xb" never opens another's
            if created:
                target.unlink(missing_ok=True)
            raise FileStorageError(str(e), original_filename) from e
        logger.info(
            f"Stored upload {stored_name}", extra={"upload_name": stored_name},
        )
        return stored_name
