"""Local filesystem object storage for uploaded images.

Storage layout:
    <upload_dir>/<bucket>/<owner_id>/<uuid>.<ext>

Objects are served publicly as ``<url_prefix>/<bucket>/<owner_id>/<uuid>.<ext>``
by the static mount set up in ``create_app``.
"""

import logging
import mimetypes
import re
from pathlib import Path
from uuid import uuid4

from inkwell.application.interfaces import ObjectStorage, StoredObject

logger = logging.getLogger(__name__)


def _extension(filename: str) -> str:
    """Lower-cased extension of the original filename, sanitised; 'bin' when absent."""
    suffix = Path(filename).suffix.lstrip(".").lower()
    return re.sub(r"[^a-z0-9]", "", suffix)[:10] or "bin"


class LocalObjectStorage(ObjectStorage):
    """Infrastructure adapter for bucket-style storage on the local disk."""

    def __init__(self, upload_dir: str, bucket: str, url_prefix: str):
        self._bucket = bucket
        self._url_prefix = url_prefix.rstrip("/")
        self._root = (Path(upload_dir) / bucket).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        """Map an object path to disk, refusing anything outside the bucket."""
        target = (self._root / path).resolve()
        if self._root not in target.parents:
            raise ValueError(f"Object path escapes the bucket: {path}")
        return target

    def public_url(self, path: str) -> str:
        return f"{self._url_prefix}/{self._bucket}/{path}"

    # ── Upload ──────────────────────────────────────────────────────

    async def upload(
        self, content: bytes, filename: str, content_type: str, owner_id: str
    ) -> StoredObject:
        """Store a blob as ``<owner_id>/<uuid>.<ext>``, keeping the original extension."""
        path = f"{owner_id}/{uuid4()}.{_extension(filename)}"
        dest_path = self._resolve(path)
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_bytes(content)

        logger.info("Stored object: %s (%d bytes)", dest_path, len(content))

        return StoredObject(
            path=path,
            url=self.public_url(path),
            size=len(content),
            content_type=content_type,
        )

    # ── Listing ─────────────────────────────────────────────────────

    async def list(self, owner_id: str) -> list[StoredObject]:
        owner_dir = self._resolve(owner_id)
        if not owner_dir.is_dir():
            return []

        objects: list[StoredObject] = []
        for file_path in sorted(owner_dir.iterdir(), key=lambda p: p.name):
            if not file_path.is_file() or file_path.name.startswith("."):
                continue
            path = f"{owner_id}/{file_path.name}"
            objects.append(
                StoredObject(
                    path=path,
                    url=self.public_url(path),
                    size=file_path.stat().st_size,
                    content_type=mimetypes.guess_type(file_path.name)[0] or "application/octet-stream",
                )
            )
        return objects

    # ── Deletion ────────────────────────────────────────────────────

    async def delete(self, path: str) -> bool:
        """Delete a stored object.

        Returns True if successfully deleted, False if not found.
        Empty owner directories are left in place.
        """
        file_path = self._resolve(path)
        if not file_path.is_file():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted object from disk: %s", path)
        return True
