"""Domain entities — pure Python business objects, no framework dependencies."""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

# Title prefix marking an article as logically deleted while its row still exists.
SOFT_DELETE_PREFIX = "[DELETED]"
DELETED_CONTENT_PLACEHOLDER = "[This article has been deleted]"

_UNSET = object()


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Strip blanks and duplicates; tags behave as a set, first spelling wins."""
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags or []:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


def soft_deleted_title() -> str:
    """Build a marker title with a random suffix so repeated soft-deletes stay distinguishable."""
    return f"{SOFT_DELETE_PREFIX} {secrets.token_hex(4)}"


def _next_timestamp(previous: datetime | None) -> datetime:
    now = datetime.now(timezone.utc)
    if previous is not None and previous.tzinfo is None:
        # SQLite hands back naive datetimes; they are stored as UTC
        previous = previous.replace(tzinfo=timezone.utc)
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


@dataclass
class AuthorSnapshot:
    """Joined author fields shown alongside an article or comment."""

    id: str
    username: str
    avatar_url: str | None = None


@dataclass
class Article:
    """Core domain entity representing a blog article."""

    title: str
    content: str
    author_id: str
    tags: list[str] = field(default_factory=list)
    published: bool = False
    featured_image_url: str | None = None
    featured_image_path: str | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Derived on read, never written back
    author: AuthorSnapshot | None = None
    comments_count: int = 0
    likes_count: int = 0

    @property
    def is_soft_deleted(self) -> bool:
        return self.title.startswith(SOFT_DELETE_PREFIX)

    def is_authored_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.author_id == user_id

    def update(
        self,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
        published: bool | None = None,
        featured_image_url: str | None = _UNSET,  # type: ignore[assignment]
        featured_image_path: str | None = _UNSET,  # type: ignore[assignment]
    ) -> None:
        """Update article fields and refresh the updated_at timestamp.

        ``updated_at`` always moves strictly forward, even when two updates
        land within the clock's resolution.
        """
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if tags is not None:
            self.tags = normalize_tags(tags)
        if published is not None:
            self.published = published
        if featured_image_url is not _UNSET:
            self.featured_image_url = featured_image_url
        if featured_image_path is not _UNSET:
            self.featured_image_path = featured_image_path
        self.updated_at = _next_timestamp(self.updated_at)


@dataclass
class ArticlePage:
    """One page of a listing plus the total number of matching rows."""

    items: list[Article]
    total: int
    skip: int = 0
    limit: int = 10


class DeletionMode(str, Enum):
    """Terminal state reached by the article deletion chain."""

    ALREADY_DELETED = "already_deleted"
    HARD = "hard"
    SOFT = "soft"
    MINIMAL = "minimal"


@dataclass
class DeletionResult:
    """Outcome reported to the caller of a delete.

    ``success`` is always true once the precheck passes; ``warning`` is set
    whenever the stored data may not match what the caller sees.
    """

    article_id: str
    mode: DeletionMode
    success: bool = True
    warning: str | None = None

    @property
    def degraded(self) -> bool:
        return self.mode in (DeletionMode.SOFT, DeletionMode.MINIMAL)
