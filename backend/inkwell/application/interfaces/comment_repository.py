"""Abstract repository interface (port) for comments."""

from abc import ABC, abstractmethod

from inkwell.domain.entities import Comment


class CommentRepository(ABC):
    """Port for comment persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, comment_id: str) -> Comment | None:
        ...

    @abstractmethod
    async def list_for_article(self, article_id: str) -> list[Comment]:
        """Comments of an article, newest first, with the commenter's snapshot."""
        ...

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def delete(self, comment_id: str) -> bool:
        ...

    @abstractmethod
    async def delete_for_article(self, article_id: str) -> int:
        """Delete every comment of an article. Returns the number removed."""
        ...
