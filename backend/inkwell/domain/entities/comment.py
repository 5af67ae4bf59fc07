"""Domain entity for article comments."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .article import AuthorSnapshot


@dataclass
class Comment:
    """A reader's comment on a published article. Only its author may edit or delete it."""

    article_id: str
    user_id: str
    content: str
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user: AuthorSnapshot | None = None

    def edit(self, content: str) -> None:
        self.content = content
        self.updated_at = datetime.now(timezone.utc)
