"""SQLAlchemy ORM models for likes and bookmarks."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.infrastructure.database.base import Base


class LikeModel(Base):
    """ORM model — maps to the 'likes' table. At most one like per user and article."""

    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("article_id", "user_id", name="uq_likes_article_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    article_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("articles.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class BookmarkModel(Base):
    """ORM model — maps to the 'bookmarks' table. At most one bookmark per user and article."""

    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("article_id", "user_id", name="uq_bookmarks_article_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    article_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
