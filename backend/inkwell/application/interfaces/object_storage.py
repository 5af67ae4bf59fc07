"""Object storage interface — user-scoped binary blobs with public URLs."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StoredObject:
    """A blob held in a storage bucket."""

    path: str
    url: str
    size: int
    content_type: str


class ObjectStorage(ABC):
    """Port for image and file storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def upload(
        self, content: bytes, filename: str, content_type: str, owner_id: str
    ) -> StoredObject:
        """Store a blob under ``<owner_id>/`` and return its path and public URL."""
        ...

    @abstractmethod
    async def list(self, owner_id: str) -> list[StoredObject]:
        """List the objects stored under ``<owner_id>/``, sorted by name."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Delete an object by path. Returns False if it did not exist."""
        ...

    @abstractmethod
    def public_url(self, path: str) -> str:
        ...
