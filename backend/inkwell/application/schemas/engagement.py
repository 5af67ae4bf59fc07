"""Pydantic DTOs for likes and bookmarks."""

from datetime import datetime

from pydantic import BaseModel

from .article import AuthorSchema


class LikeStatusResponse(BaseModel):
    article_id: str
    liked: bool


class ArticleSnapshotSchema(BaseModel):
    id: str
    title: str
    created_at: datetime
    tags: list[str] = []
    featured_image_url: str | None = None
    author: AuthorSchema | None = None

    model_config = {"from_attributes": True}


class BookmarkResponse(BaseModel):
    id: str
    article_id: str
    user_id: str
    created_at: datetime
    article: ArticleSnapshotSchema | None = None

    model_config = {"from_attributes": True}


class BookmarkToggleResponse(BaseModel):
    """Result of a toggle plus the updated shelf, so clients need not refetch."""

    article_id: str
    bookmarked: bool
    bookmarks: list[BookmarkResponse]
