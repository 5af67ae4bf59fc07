"""Concrete repository implementation for comments backed by SQLAlchemy."""

from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.application.interfaces import CommentRepository
from inkwell.domain.entities import Comment
from inkwell.domain.exceptions import EntityNotFoundError, PersistenceError
from inkwell.infrastructure.database.models import CommentModel, UserProfileModel
from inkwell.infrastructure.database.repositories.common import author_snapshot, gateway_errors


class SQLAlchemyCommentRepository(CommentRepository):
    """Implements the CommentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CommentModel, profile: UserProfileModel | None = None) -> Comment:
        return Comment(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
            user=author_snapshot(profile),
        )

    def _select(self):
        return select(CommentModel, UserProfileModel).outerjoin(
            UserProfileModel, UserProfileModel.id == CommentModel.user_id
        )

    async def get_by_id(self, comment_id: str) -> Comment | None:
        async with gateway_errors(self._session, "select comment"):
            row = (await self._session.execute(self._select().where(CommentModel.id == comment_id))).first()
        return self._to_entity(*row) if row else None

    async def list_for_article(self, article_id: str) -> list[Comment]:
        stmt = (
            self._select()
            .where(CommentModel.article_id == article_id)
            .order_by(CommentModel.created_at.desc())
        )
        async with gateway_errors(self._session, "list comments"):
            rows = (await self._session.execute(stmt)).all()
        return [self._to_entity(model, profile) for model, profile in rows]

    async def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            id=comment.id or str(uuid4()),
            article_id=comment.article_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        async with gateway_errors(self._session, "insert comment", entity_type="Comment", value=model.id):
            self._session.add(model)
            await self._session.flush()
        created = await self.get_by_id(model.id)
        if created is None:
            raise PersistenceError("insert comment", f"comment {model.id} not readable after write")
        return created

    async def update(self, comment: Comment) -> Comment:
        async with gateway_errors(self._session, "update comment"):
            model = await self._session.get(CommentModel, comment.id)
            if model is None:
                raise EntityNotFoundError("Comment", str(comment.id))
            model.content = comment.content
            model.updated_at = comment.updated_at
            await self._session.flush()
        updated = await self.get_by_id(model.id)
        return updated if updated is not None else self._to_entity(model)

    async def delete(self, comment_id: str) -> bool:
        async with gateway_errors(self._session, "delete comment"):
            result = await self._session.execute(delete(CommentModel).where(CommentModel.id == comment_id))
        return result.rowcount > 0

    async def delete_for_article(self, article_id: str) -> int:
        async with gateway_errors(self._session, "delete comments of article", savepoint=True):
            result = await self._session.execute(
                delete(CommentModel).where(CommentModel.article_id == article_id)
            )
        return result.rowcount
