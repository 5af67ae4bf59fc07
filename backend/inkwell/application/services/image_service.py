"""Application service for article image uploads."""

import logging

from inkwell.application.interfaces import ObjectStorage, StoredObject
from inkwell.domain.entities import Actor
from inkwell.domain.exceptions import InvalidUploadError, PermissionDeniedError

logger = logging.getLogger(__name__)


class ImageService:
    """Validates images and stores them under the uploader's own folder."""

    def __init__(
        self,
        storage: ObjectStorage,
        *,
        allowed_types: list[str],
        max_bytes: int,
    ):
        self._storage = storage
        self._allowed_types = set(allowed_types)
        self._max_bytes = max_bytes

    async def upload_image(
        self, actor: Actor, content: bytes, filename: str, content_type: str | None
    ) -> StoredObject:
        if not content:
            raise InvalidUploadError("Uploaded file is empty")
        if content_type not in self._allowed_types:
            raise InvalidUploadError(f"Unsupported image type: {content_type}")
        if len(content) > self._max_bytes:
            raise InvalidUploadError(
                f"Image is {len(content)} bytes, the limit is {self._max_bytes}"
            )
        stored = await self._storage.upload(content, filename, content_type, owner_id=actor.id)
        logger.info("Stored image %s for %s", stored.path, actor.id)
        return stored

    async def list_images(self, actor: Actor) -> list[StoredObject]:
        return await self._storage.list(actor.id)

    async def delete_image(self, actor: Actor, path: str) -> bool:
        if not path.startswith(f"{actor.id}/"):
            raise PermissionDeniedError("delete", "Image", path)
        return await self._storage.delete(path)
