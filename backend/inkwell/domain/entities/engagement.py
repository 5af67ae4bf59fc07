"""Domain entities for likes and bookmarks — existence of the row is the state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .article import AuthorSnapshot


@dataclass
class Like:
    """A user's like of an article, unique per (article_id, user_id)."""

    article_id: str
    user_id: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ArticleSnapshot:
    """Display fields of a bookmarked article, joined with its author."""

    id: str
    title: str
    created_at: datetime
    tags: list[str] = field(default_factory=list)
    featured_image_url: str | None = None
    author: AuthorSnapshot | None = None


@dataclass
class Bookmark:
    """A user's bookmark of an article, unique per (article_id, user_id)."""

    article_id: str
    user_id: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    article: ArticleSnapshot | None = None
