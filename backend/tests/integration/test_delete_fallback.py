"""Delete chain against a real SQLite database whose article deletes are rejected."""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inkwell.application.services import ArticleService
from inkwell.domain.entities import Actor, Article, Comment, DeletionMode, Like
from inkwell.infrastructure.database import Base, CommentModel, LikeModel
from inkwell.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyLikeRepository,
)
from inkwell.infrastructure.database.session import build_engine

AUTHOR = Actor(id="author-1", email="author@example.com")


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path):
    engine = build_engine(f"sqlite:///{tmp_path / 'fallback.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            text(
                "CREATE TRIGGER reject_article_delete BEFORE DELETE ON articles "
                "BEGIN SELECT RAISE(ABORT, 'article deletes are disabled'); END"
            )
        )
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


def _service(session: AsyncSession) -> ArticleService:
    return ArticleService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCommentRepository(session),
        SQLAlchemyLikeRepository(session),
    )


@pytest.mark.asyncio
async def test_rejected_row_delete_keeps_comment_and_like_cleanup(session_factory):
    async with session_factory() as session:
        article = await SQLAlchemyArticleRepository(session).create(
            Article(title="Doomed", content="Body", author_id=AUTHOR.id, published=True)
        )
        await SQLAlchemyCommentRepository(session).create(
            Comment(article_id=article.id, user_id="reader-1", content="Nice")
        )
        await SQLAlchemyLikeRepository(session).create(Like(article_id=article.id, user_id="reader-1"))
        await session.commit()

    async with session_factory() as session:
        result = await _service(session).delete_article(AUTHOR, article.id)
        await session.commit()

    assert result.success is True
    assert result.mode == DeletionMode.SOFT

    async with session_factory() as session:
        stored = await SQLAlchemyArticleRepository(session).get_by_id(article.id)
        comments = (await session.execute(select(func.count(CommentModel.id)))).scalar_one()
        likes = (await session.execute(select(func.count(LikeModel.id)))).scalar_one()

    assert stored.is_soft_deleted
    assert stored.published is False
    assert comments == 0
    assert likes == 0
