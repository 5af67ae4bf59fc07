"""Concrete repository implementation for likes backed by SQLAlchemy."""

from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.application.interfaces import LikeRepository
from inkwell.domain.entities import Like
from inkwell.infrastructure.database.models import LikeModel
from inkwell.infrastructure.database.repositories.common import gateway_errors


class SQLAlchemyLikeRepository(LikeRepository):
    """Implements the LikeRepository port. The unique constraint guards concurrent likes."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: LikeModel) -> Like:
        return Like(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            created_at=model.created_at,
        )

    async def get(self, article_id: str, user_id: str) -> Like | None:
        stmt = select(LikeModel).where(LikeModel.article_id == article_id, LikeModel.user_id == user_id)
        async with gateway_errors(self._session, "select like"):
            model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, like: Like) -> Like:
        model = LikeModel(
            id=like.id or str(uuid4()),
            article_id=like.article_id,
            user_id=like.user_id,
            created_at=like.created_at,
        )
        async with gateway_errors(
            self._session,
            "insert like",
            entity_type="Like",
            field="article_id,user_id",
            value=f"{like.article_id},{like.user_id}",
        ):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, article_id: str, user_id: str) -> bool:
        stmt = delete(LikeModel).where(LikeModel.article_id == article_id, LikeModel.user_id == user_id)
        async with gateway_errors(self._session, "delete like"):
            result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_for_article(self, article_id: str) -> int:
        async with gateway_errors(self._session, "delete likes of article", savepoint=True):
            result = await self._session.execute(delete(LikeModel).where(LikeModel.article_id == article_id))
        return result.rowcount
