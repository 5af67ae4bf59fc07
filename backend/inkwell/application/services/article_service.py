"""Application service (use case) for Article operations.

Owns the article aggregate (article + comments + likes): creation,
partial updates, publish state, read filters and the layered delete.

Deletion runs as a fixed chain, each stage at most once:

    PRECHECK ──(already marked)──────────────▶ done (already_deleted)
    PRECHECK ──▶ HARD_DELETE ──▶ VERIFY ──(gone)──▶ done (hard)
    VERIFY ──(still present)──▶ SOFT_DELETE ──(ok)──▶ done (soft)
    SOFT_DELETE ──(failed)──▶ MINIMAL_MARK ──▶ done (minimal, warning)
"""

import asyncio

from inkwell.application.interfaces import ArticleRepository, CommentRepository, LikeRepository
from inkwell.application.schemas import ArticleCreate, ArticleUpdate
from inkwell.domain.entities import (
    Actor,
    Article,
    ArticlePage,
    DELETED_CONTENT_PLACEHOLDER,
    DeletionMode,
    DeletionResult,
    normalize_tags,
    soft_deleted_title,
)
from inkwell.domain.exceptions import EntityNotFoundError, PermissionDeniedError
from inkwell.infrastructure.logging.colored_logger import LifecycleLogger, LifecycleStage

log = LifecycleLogger("ArticleLifecycle")

ORDERABLE_FIELDS = ("created_at", "updated_at", "title")


class ArticleService:
    """Orchestrates article business logic. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        *,
        verify_attempts: int = 1,
        verify_delay_seconds: float = 0.0,
    ):
        self._repository = repository
        self._comments = comment_repository
        self._likes = like_repository
        self._verify_attempts = max(1, verify_attempts)
        self._verify_delay = max(0.0, verify_delay_seconds)

    # ── Reads ───────────────────────────────────────────────────────

    async def get_article(self, article_id: str, actor: Actor | None = None) -> Article:
        """Fetch a live article. Drafts are visible to their author only."""
        article = await self._repository.get_by_id(article_id)
        if article is None or article.is_soft_deleted:
            raise EntityNotFoundError("Article", article_id)
        if not article.published and not article.is_authored_by(actor.id if actor else None):
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_published(
        self,
        skip: int = 0,
        limit: int = 10,
        order_by: str = "created_at",
        ascending: bool = False,
    ) -> ArticlePage:
        if order_by not in ORDERABLE_FIELDS:
            raise ValueError(f"Cannot order articles by '{order_by}'")
        return await self._repository.list_articles(
            published=True, skip=skip, limit=limit, order_by=order_by, ascending=ascending
        )

    async def list_by_tag(self, tag: str, skip: int = 0, limit: int = 10) -> ArticlePage:
        return await self._repository.list_articles(
            published=True, tag=tag.strip(), skip=skip, limit=limit
        )

    async def search(self, query: str, skip: int = 0, limit: int = 10) -> ArticlePage:
        """Case-insensitive substring search over title and content of published articles."""
        return await self._repository.list_articles(
            published=True, search=query.strip() or None, skip=skip, limit=limit
        )

    async def list_by_author(
        self,
        author_id: str,
        actor: Actor | None = None,
        *,
        include_unpublished: bool = False,
        skip: int = 0,
        limit: int = 10,
    ) -> ArticlePage:
        """List an author's articles. Drafts are only included for the author themself."""
        include_drafts = include_unpublished and actor is not None and actor.id == author_id
        return await self._repository.list_articles(
            published=None if include_drafts else True,
            author_id=author_id,
            skip=skip,
            limit=limit,
        )

    # ── Writes ──────────────────────────────────────────────────────

    async def create_article(self, actor: Actor, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            author_id=actor.id,
            tags=normalize_tags(data.tags),
            published=data.published,
            featured_image_url=data.featured_image_url,
            featured_image_path=data.featured_image_path,
        )
        return await self._repository.create(article)

    async def update_article(self, actor: Actor, article_id: str, data: ArticleUpdate) -> Article:
        article = await self._get_owned(actor, article_id, action="update")
        article.update(**data.model_dump(exclude_unset=True))
        return await self._repository.update(article)

    async def set_published(self, actor: Actor, article_id: str, published: bool) -> Article:
        return await self.update_article(actor, article_id, ArticleUpdate(published=published))

    async def _get_owned(self, actor: Actor, article_id: str, *, action: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None or article.is_soft_deleted:
            raise EntityNotFoundError("Article", article_id)
        if not article.is_authored_by(actor.id):
            raise PermissionDeniedError(action, "Article", article_id)
        return article

    # ── Delete chain ────────────────────────────────────────────────

    async def delete_article(self, actor: Actor, article_id: str) -> DeletionResult:
        """Delete an article, degrading to a soft delete when a hard delete does not stick.

        Raises EntityNotFoundError / PermissionDeniedError from the precheck.
        Past the precheck the call always reports success; ``warning`` is
        set when the stored row was only marked rather than removed.
        """
        log.step_start(LifecycleStage.PRECHECK, "Checking article", article_id=article_id, actor=actor.id)
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        if not article.is_authored_by(actor.id):
            raise PermissionDeniedError("delete", "Article", article_id)
        if article.is_soft_deleted:
            log.step_complete(LifecycleStage.PRECHECK, "Already marked as deleted, nothing to do")
            return DeletionResult(article_id=article_id, mode=DeletionMode.ALREADY_DELETED)

        await self._hard_delete(article_id)

        remaining = await self._verify_removed(article)
        if remaining is None:
            log.step_complete(LifecycleStage.COMPLETE, "Article hard-deleted", article_id=article_id)
            return DeletionResult(article_id=article_id, mode=DeletionMode.HARD)
        if remaining.is_soft_deleted:
            log.step_complete(LifecycleStage.COMPLETE, "Article was marked deleted concurrently")
            return DeletionResult(article_id=article_id, mode=DeletionMode.ALREADY_DELETED)

        result = await self._soft_delete(article_id)
        if result is not None:
            return result
        return await self._minimal_mark(article_id)

    async def _hard_delete(self, article_id: str) -> None:
        log.step_start(LifecycleStage.HARD_DELETE, "Removing comments, likes and article row")
        try:
            removed = await self._comments.delete_for_article(article_id)
            log.detail("Comments removed", count=removed)
        except Exception as e:
            log.step_warning(LifecycleStage.HARD_DELETE, "Could not remove comments, continuing", error=e)
        try:
            removed = await self._likes.delete_for_article(article_id)
            log.detail("Likes removed", count=removed)
        except Exception as e:
            log.step_warning(LifecycleStage.HARD_DELETE, "Could not remove likes, continuing", error=e)
        try:
            await self._repository.delete(article_id)
        except Exception as e:
            log.step_warning(LifecycleStage.HARD_DELETE, "Article row delete rejected", error=e)

    async def _verify_removed(self, article: Article) -> Article | None:
        """Re-read the article; returns the row if it is still there."""
        remaining: Article | None = article
        for attempt in range(1, self._verify_attempts + 1):
            try:
                with log.timed_step(LifecycleStage.VERIFY, "Re-reading article", attempt=attempt):
                    remaining = await self._repository.get_by_id(article.id)
            except Exception:
                # Unreadable counts as still present; the soft delete is harmless if it is gone
                remaining = article
            if remaining is None:
                return None
            if attempt < self._verify_attempts and self._verify_delay:
                await asyncio.sleep(self._verify_delay)
        log.step_warning(LifecycleStage.VERIFY, "Article still present after hard delete")
        return remaining

    async def _soft_delete(self, article_id: str) -> DeletionResult | None:
        log.step_start(LifecycleStage.SOFT_DELETE, "Hiding article behind the deletion marker")
        patch = {
            "published": False,
            "title": soft_deleted_title(),
            "content": DELETED_CONTENT_PLACEHOLDER,
        }
        try:
            updated = await self._repository.patch(article_id, patch)
        except Exception as e:
            log.step_warning(LifecycleStage.SOFT_DELETE, "Soft delete rejected", error=e)
            return None
        if updated is None:
            log.step_complete(LifecycleStage.SOFT_DELETE, "Row vanished before the soft delete")
            return DeletionResult(article_id=article_id, mode=DeletionMode.HARD)
        log.step_complete(LifecycleStage.SOFT_DELETE, "Article soft-deleted", title=updated.title)
        return DeletionResult(
            article_id=article_id,
            mode=DeletionMode.SOFT,
            warning="Article could not be removed and was hidden with a soft delete instead.",
        )

    async def _minimal_mark(self, article_id: str) -> DeletionResult:
        log.step_start(LifecycleStage.MINIMAL_MARK, "Rewriting title only")
        patch = {"title": soft_deleted_title()}
        try:
            updated = await self._repository.patch(article_id, patch)
        except Exception as e:
            log.step_error(LifecycleStage.MINIMAL_MARK, "Deletion marker could not be written", error=e)
            return DeletionResult(
                article_id=article_id,
                mode=DeletionMode.MINIMAL,
                warning=f"Article could not be deleted or marked as deleted: {e}",
            )
        if updated is None:
            return DeletionResult(article_id=article_id, mode=DeletionMode.HARD)
        log.step_complete(LifecycleStage.MINIMAL_MARK, "Title marked as deleted", title=updated.title)
        return DeletionResult(
            article_id=article_id,
            mode=DeletionMode.MINIMAL,
            warning="Only the title was marked as deleted; content and publish state are unchanged.",
        )
