"""Concrete repository implementation backed by SQLAlchemy."""

from typing import Any
from uuid import uuid4

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.application.interfaces import ArticleRepository
from inkwell.domain.entities import SOFT_DELETE_PREFIX, Article, ArticlePage
from inkwell.domain.exceptions import EntityNotFoundError, PersistenceError
from inkwell.infrastructure.database.models import (
    ArticleModel,
    ArticleTagModel,
    CommentModel,
    LikeModel,
    UserProfileModel,
)
from inkwell.infrastructure.database.repositories.common import author_snapshot, gateway_errors

_ORDER_COLUMNS = {
    "created_at": ArticleModel.created_at,
    "updated_at": ArticleModel.updated_at,
    "title": ArticleModel.title,
}
_PATCHABLE = frozenset({
    "title",
    "content",
    "tags",
    "published",
    "featured_image_url",
    "featured_image_path",
    "updated_at",
})


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _not_soft_deleted():
    return ArticleModel.title.not_like(f"{SOFT_DELETE_PREFIX}%")


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(
        self,
        model: ArticleModel,
        comments_count: int = 0,
        likes_count: int = 0,
        profile: UserProfileModel | None = None,
    ) -> Article:
        """Map ORM model (+ joined aggregates) → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            tags=[row.tag for row in model.tag_rows],
            published=model.published,
            featured_image_url=model.featured_image_url,
            featured_image_path=model.featured_image_path,
            created_at=model.created_at,
            updated_at=model.updated_at,
            author=author_snapshot(profile),
            comments_count=comments_count or 0,
            likes_count=likes_count or 0,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        model = ArticleModel(
            id=entity.id or str(uuid4()),
            title=entity.title,
            content=entity.content,
            author_id=entity.author_id,
            published=entity.published,
            featured_image_url=entity.featured_image_url,
            featured_image_path=entity.featured_image_path,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
        model.tag_rows = [ArticleTagModel(tag=tag, position=i) for i, tag in enumerate(entity.tags)]
        return model

    @staticmethod
    def _apply_tags(model: ArticleModel, tags: list[str]) -> None:
        # Reuse surviving rows so unchanged (article_id, tag) keys are not re-inserted
        existing = {row.tag: row for row in model.tag_rows}
        rows: list[ArticleTagModel] = []
        for position, tag in enumerate(tags):
            row = existing.get(tag) or ArticleTagModel(tag=tag)
            row.position = position
            rows.append(row)
        model.tag_rows = rows

    def _select_with_aggregates(self):
        comments_count = (
            select(func.count(CommentModel.id))
            .where(CommentModel.article_id == ArticleModel.id)
            .correlate(ArticleModel)
            .scalar_subquery()
        )
        likes_count = (
            select(func.count(LikeModel.id))
            .where(LikeModel.article_id == ArticleModel.id)
            .correlate(ArticleModel)
            .scalar_subquery()
        )
        return select(
            ArticleModel,
            comments_count.label("comments_count"),
            likes_count.label("likes_count"),
            UserProfileModel,
        ).outerjoin(UserProfileModel, UserProfileModel.id == ArticleModel.author_id)

    async def get_by_id(self, article_id: str) -> Article | None:
        stmt = self._select_with_aggregates().where(ArticleModel.id == article_id)
        async with gateway_errors(self._session, "select article"):
            row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        model, comments_count, likes_count, profile = row
        return self._to_entity(model, comments_count, likes_count, profile)

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
        order_column = _ORDER_COLUMNS.get(order_by)
        if order_column is None:
            raise ValueError(f"Cannot order articles by '{order_by}'")

        conditions = [_not_soft_deleted()]
        if published is not None:
            conditions.append(ArticleModel.published == published)
        if author_id is not None:
            conditions.append(ArticleModel.author_id == author_id)
        if tag:
            conditions.append(
                ArticleModel.id.in_(
                    select(ArticleTagModel.article_id).where(ArticleTagModel.tag == tag)
                )
            )
        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                or_(
                    ArticleModel.title.ilike(pattern, escape="\\"),
                    ArticleModel.content.ilike(pattern, escape="\\"),
                )
            )

        count_stmt = select(func.count()).select_from(ArticleModel).where(*conditions)
        stmt = (
            self._select_with_aggregates()
            .where(*conditions)
            .order_by(order_column.asc() if ascending else order_column.desc(), ArticleModel.id)
            .offset(skip)
            .limit(limit)
        )
        async with gateway_errors(self._session, "list articles"):
            total = (await self._session.execute(count_stmt)).scalar_one()
            rows = (await self._session.execute(stmt)).all()

        return ArticlePage(
            items=[self._to_entity(m, c, l, p) for m, c, l, p in rows],
            total=total,
            skip=skip,
            limit=limit,
        )

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        async with gateway_errors(self._session, "insert article", entity_type="Article", value=model.id):
            self._session.add(model)
            await self._session.flush()
        return await self._reselect(model.id, "insert article")

    async def update(self, article: Article) -> Article:
        async with gateway_errors(self._session, "update article", entity_type="Article", value=str(article.id)):
            model = await self._session.get(ArticleModel, article.id)
            if model is None:
                raise EntityNotFoundError("Article", str(article.id))
            model.title = article.title
            model.content = article.content
            model.published = article.published
            model.featured_image_url = article.featured_image_url
            model.featured_image_path = article.featured_image_path
            model.updated_at = article.updated_at
            self._apply_tags(model, article.tags)
            await self._session.flush()
        return await self._reselect(model.id, "update article")

    async def patch(self, article_id: str, fields: dict[str, Any]) -> Article | None:
        unknown = set(fields) - _PATCHABLE
        if unknown:
            raise ValueError(f"Cannot patch article fields: {sorted(unknown)}")

        async with gateway_errors(self._session, "patch article", entity_type="Article", value=article_id):
            model = await self._session.get(ArticleModel, article_id)
            if model is None:
                return None
            for key, value in fields.items():
                if key == "tags":
                    self._apply_tags(model, value)
                else:
                    setattr(model, key, value)
            await self._session.flush()
        return await self._reselect(article_id, "patch article")

    async def delete(self, article_id: str) -> bool:
        async with gateway_errors(
            self._session, "delete article", entity_type="Article", value=article_id, savepoint=True
        ):
            model = await self._session.get(ArticleModel, article_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def _reselect(self, article_id: str, operation: str) -> Article:
        """Select the row immediately after a write, with its joined author and counts."""
        article = await self.get_by_id(article_id)
        if article is None:
            raise PersistenceError(operation, f"article {article_id} not readable after write")
        return article
