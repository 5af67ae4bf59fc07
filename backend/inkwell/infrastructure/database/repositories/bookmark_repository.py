"""Concrete repository implementation for bookmarks backed by SQLAlchemy."""

from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.application.interfaces import BookmarkRepository
from inkwell.domain.entities import SOFT_DELETE_PREFIX, ArticleSnapshot, Bookmark
from inkwell.infrastructure.database.models import ArticleModel, BookmarkModel, UserProfileModel
from inkwell.infrastructure.database.repositories.common import author_snapshot, gateway_errors


class SQLAlchemyBookmarkRepository(BookmarkRepository):
    """Implements the BookmarkRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: BookmarkModel, snapshot: ArticleSnapshot | None = None) -> Bookmark:
        return Bookmark(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            created_at=model.created_at,
            article=snapshot,
        )

    @staticmethod
    def _to_snapshot(article: ArticleModel, profile: UserProfileModel | None) -> ArticleSnapshot:
        return ArticleSnapshot(
            id=article.id,
            title=article.title,
            created_at=article.created_at,
            tags=[row.tag for row in article.tag_rows],
            featured_image_url=article.featured_image_url,
            author=author_snapshot(profile),
        )

    async def list_for_user(self, user_id: str) -> list[Bookmark]:
        stmt = (
            select(BookmarkModel, ArticleModel, UserProfileModel)
            .join(ArticleModel, ArticleModel.id == BookmarkModel.article_id)
            .outerjoin(UserProfileModel, UserProfileModel.id == ArticleModel.author_id)
            .where(
                BookmarkModel.user_id == user_id,
                ArticleModel.published == True,  # noqa: E712
                ArticleModel.title.not_like(f"{SOFT_DELETE_PREFIX}%"),
            )
            .order_by(BookmarkModel.created_at)
        )
        async with gateway_errors(self._session, "list bookmarks"):
            rows = (await self._session.execute(stmt)).all()
        return [
            self._to_entity(bookmark, self._to_snapshot(article, profile))
            for bookmark, article, profile in rows
        ]

    async def get(self, article_id: str, user_id: str) -> Bookmark | None:
        stmt = select(BookmarkModel).where(
            BookmarkModel.article_id == article_id, BookmarkModel.user_id == user_id
        )
        async with gateway_errors(self._session, "select bookmark"):
            model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, bookmark: Bookmark) -> Bookmark:
        model = BookmarkModel(
            id=bookmark.id or str(uuid4()),
            article_id=bookmark.article_id,
            user_id=bookmark.user_id,
            created_at=bookmark.created_at,
        )
        async with gateway_errors(
            self._session,
            "insert bookmark",
            entity_type="Bookmark",
            field="article_id,user_id",
            value=f"{bookmark.article_id},{bookmark.user_id}",
        ):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, article_id: str, user_id: str) -> bool:
        stmt = delete(BookmarkModel).where(
            BookmarkModel.article_id == article_id, BookmarkModel.user_id == user_id
        )
        async with gateway_errors(self._session, "delete bookmark"):
            result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def get_article_snapshot(self, article_id: str) -> ArticleSnapshot | None:
        stmt = (
            select(ArticleModel, UserProfileModel)
            .outerjoin(UserProfileModel, UserProfileModel.id == ArticleModel.author_id)
            .where(
                ArticleModel.id == article_id,
                ArticleModel.published == True,  # noqa: E712
                ArticleModel.title.not_like(f"{SOFT_DELETE_PREFIX}%"),
            )
        )
        async with gateway_errors(self._session, "select article snapshot"):
            row = (await self._session.execute(stmt)).first()
        return self._to_snapshot(*row) if row else None
