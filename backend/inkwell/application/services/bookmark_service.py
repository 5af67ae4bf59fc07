"""Application service (use case) for bookmarks and the per-user bookmark shelf."""

import logging

from inkwell.application.interfaces import BookmarkRepository
from inkwell.domain.entities import Actor, Bookmark
from inkwell.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


class BookmarkService:
    """Add / remove bookmarks. Adding an existing bookmark is a no-op."""

    def __init__(self, repository: BookmarkRepository):
        self._repository = repository

    async def list_bookmarks(self, actor: Actor) -> list[Bookmark]:
        return await self._repository.list_for_user(actor.id)

    async def add_bookmark(self, actor: Actor, article_id: str) -> Bookmark:
        """Create a bookmark and attach the article snapshot used for display."""
        snapshot = await self._repository.get_article_snapshot(article_id)
        if snapshot is None:
            raise EntityNotFoundError("Article", article_id)
        try:
            bookmark = await self._repository.create(Bookmark(article_id=article_id, user_id=actor.id))
        except DuplicateEntityError:
            logger.debug("Article %s already bookmarked by %s", article_id, actor.id)
            bookmark = await self._repository.get(article_id, actor.id) or Bookmark(
                article_id=article_id, user_id=actor.id
            )
        bookmark.article = snapshot
        return bookmark

    async def remove_bookmark(self, actor: Actor, article_id: str) -> bool:
        return await self._repository.delete(article_id, actor.id)


class BookmarkShelf:
    """Cached list of one actor's bookmarks, kept in step with toggles without refetching.

    Usage:
        shelf = BookmarkShelf(service, actor)
        await shelf.load()
        bookmarked = await shelf.toggle(article_id)
    """

    def __init__(self, service: BookmarkService, actor: Actor):
        self._service = service
        self._actor = actor
        self._items: list[Bookmark] = []

    @property
    def items(self) -> list[Bookmark]:
        return list(self._items)

    async def load(self) -> list[Bookmark]:
        self._items = await self._service.list_bookmarks(self._actor)
        return self.items

    def is_bookmarked(self, article_id: str) -> bool:
        return any(b.article_id == article_id for b in self._items)

    async def toggle(self, article_id: str) -> bool:
        """Flip the bookmark state of an article. Returns the new state."""
        if self.is_bookmarked(article_id):
            await self._service.remove_bookmark(self._actor, article_id)
            self._items = [b for b in self._items if b.article_id != article_id]
            return False

        bookmark = await self._service.add_bookmark(self._actor, article_id)
        self._items.append(bookmark)
        return True
