"""Domain entities for identities and user profiles."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Actor:
    """The authenticated identity performing an operation."""

    id: str
    email: str


@dataclass
class AuthSession:
    """A signed-in session issued by the identity provider."""

    actor: Actor
    access_token: str
    expires_in: int


@dataclass
class UserProfile:
    """Public profile, keyed by the identity id. Created lazily on first lookup."""

    id: str
    username: str
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, username: str | None = None, avatar_url: str | None = None) -> None:
        if username is not None:
            self.username = username
        if avatar_url is not None:
            self.avatar_url = avatar_url
        self.updated_at = datetime.now(timezone.utc)
