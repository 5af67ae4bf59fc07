"""Application service (use case) for article likes."""

import logging

from inkwell.application.interfaces import ArticleRepository, LikeRepository
from inkwell.domain.entities import Actor, Like
from inkwell.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


class LikeService:
    """Like / unlike as existence of a row. Both directions are idempotent."""

    def __init__(self, repository: LikeRepository, article_repository: ArticleRepository):
        self._repository = repository
        self._articles = article_repository

    async def like(self, actor: Actor, article_id: str) -> Like:
        """Like an article. Liking twice, even concurrently, is a no-op."""
        article = await self._articles.get_by_id(article_id)
        if article is None or article.is_soft_deleted or not article.published:
            raise EntityNotFoundError("Article", article_id)

        existing = await self._repository.get(article_id, actor.id)
        if existing is not None:
            return existing
        try:
            return await self._repository.create(Like(article_id=article_id, user_id=actor.id))
        except DuplicateEntityError:
            logger.debug("Concurrent like for article %s by %s", article_id, actor.id)
            existing = await self._repository.get(article_id, actor.id)
            return existing or Like(article_id=article_id, user_id=actor.id)

    async def unlike(self, actor: Actor, article_id: str) -> bool:
        """Remove a like. Returns False if there was none."""
        return await self._repository.delete(article_id, actor.id)

    async def has_liked(self, actor: Actor, article_id: str) -> bool:
        return await self._repository.get(article_id, actor.id) is not None
