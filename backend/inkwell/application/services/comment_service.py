"""Application service (use case) for comments on articles."""

from inkwell.application.interfaces import ArticleRepository, CommentRepository
from inkwell.application.schemas import CommentResponse
from inkwell.application.services.change_feed import ChangeFeed
from inkwell.domain.entities import Actor, ChangeEvent, ChangeType, Comment
from inkwell.domain.exceptions import EntityNotFoundError, PermissionDeniedError

COMMENTS_TABLE = "comments"


class CommentService:
    """Comment CRUD with author-only edits. Every write is published on the change feed."""

    def __init__(
        self,
        repository: CommentRepository,
        article_repository: ArticleRepository,
        change_feed: ChangeFeed | None = None,
    ):
        self._repository = repository
        self._articles = article_repository
        self._feed = change_feed

    async def list_comments(self, article_id: str) -> list[Comment]:
        await self._require_live_article(article_id)
        return await self._repository.list_for_article(article_id)

    async def add_comment(self, actor: Actor, article_id: str, content: str) -> Comment:
        await self._require_live_article(article_id)
        comment = await self._repository.create(
            Comment(article_id=article_id, user_id=actor.id, content=content.strip())
        )
        await self._publish(ChangeType.INSERT, new=comment)
        return comment

    async def update_comment(self, actor: Actor, comment_id: str, content: str) -> Comment:
        comment = await self._get_owned(actor, comment_id, action="edit")
        comment.edit(content.strip())
        updated = await self._repository.update(comment)
        await self._publish(ChangeType.UPDATE, new=updated)
        return updated

    async def delete_comment(self, actor: Actor, comment_id: str) -> None:
        comment = await self._get_owned(actor, comment_id, action="delete")
        await self._repository.delete(comment_id)
        await self._publish(ChangeType.DELETE, old=comment)

    async def _get_owned(self, actor: Actor, comment_id: str, *, action: str) -> Comment:
        comment = await self._repository.get_by_id(comment_id)
        if comment is None:
            raise EntityNotFoundError("Comment", comment_id)
        if comment.user_id != actor.id:
            raise PermissionDeniedError(action, "Comment", comment_id)
        return comment

    async def _require_live_article(self, article_id: str) -> None:
        # Comments only exist on published, non-deleted articles
        article = await self._articles.get_by_id(article_id)
        if article is None or article.is_soft_deleted or not article.published:
            raise EntityNotFoundError("Article", article_id)

    async def _publish(
        self, change_type: ChangeType, *, new: Comment | None = None, old: Comment | None = None
    ) -> None:
        if self._feed is None:
            return
        await self._feed.publish(
            ChangeEvent(
                table=COMMENTS_TABLE,
                change_type=change_type,
                new=_serialize(new) if new else {},
                old=_serialize(old) if old else {},
            )
        )


def _serialize(comment: Comment) -> dict:
    return CommentResponse.model_validate(comment, from_attributes=True).model_dump(mode="json")
