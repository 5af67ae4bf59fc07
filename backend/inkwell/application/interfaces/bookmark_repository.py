"""Abstract repository interface (port) for bookmarks."""

from abc import ABC, abstractmethod

from inkwell.domain.entities import ArticleSnapshot, Bookmark


class BookmarkRepository(ABC):
    """Port for bookmark persistence.

    ``create`` raises DuplicateEntityError when the (article_id, user_id)
    pair already exists.
    """

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[Bookmark]:
        """Bookmarks of a user on published, live articles, each joined with its article snapshot."""
        ...

    @abstractmethod
    async def get(self, article_id: str, user_id: str) -> Bookmark | None:
        ...

    @abstractmethod
    async def create(self, bookmark: Bookmark) -> Bookmark:
        ...

    @abstractmethod
    async def delete(self, article_id: str, user_id: str) -> bool:
        ...

    @abstractmethod
    async def get_article_snapshot(self, article_id: str) -> ArticleSnapshot | None:
        """Display fields of an article plus its author, or None when absent."""
        ...
