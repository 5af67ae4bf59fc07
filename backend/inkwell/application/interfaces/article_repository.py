"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from typing import Any

from inkwell.domain.entities import Article, ArticlePage


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    ``get_by_id`` returns the raw row (drafts and soft-deleted rows included)
    so lifecycle code can inspect it. ``list_articles`` never returns rows
    whose title carries the soft-delete marker.
    """

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID, or None when absent."""
        ...

    @abstractmethod
    async def list_articles(
        self,
        *,
        published: bool | None = True,
        author_id: str | None = None,
        tag: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
        order_by: str = "created_at",
        ascending: bool = False,
    ) -> ArticlePage:
        """Retrieve a filtered page of live articles together with the total count.

        ``published=None`` disables the published filter (author's own view).
        ``search`` is a case-insensitive substring match on title OR content.
        """
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Write every mutable field of an existing article."""
        ...

    @abstractmethod
    async def patch(self, article_id: str, fields: dict[str, Any]) -> Article | None:
        """Write only the given columns. Returns None if the row does not exist."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...
