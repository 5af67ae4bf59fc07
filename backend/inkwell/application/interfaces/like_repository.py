"""Abstract repository interface (port) for likes."""

from abc import ABC, abstractmethod

from inkwell.domain.entities import Like


class LikeRepository(ABC):
    """Port for like persistence.

    ``create`` raises DuplicateEntityError when the (article_id, user_id)
    pair already exists.
    """

    @abstractmethod
    async def get(self, article_id: str, user_id: str) -> Like | None:
        ...

    @abstractmethod
    async def create(self, like: Like) -> Like:
        ...

    @abstractmethod
    async def delete(self, article_id: str, user_id: str) -> bool:
        ...

    @abstractmethod
    async def delete_for_article(self, article_id: str) -> int:
        ...
