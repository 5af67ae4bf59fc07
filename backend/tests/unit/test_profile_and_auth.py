"""Unit tests for ProfileService and AuthService."""

import pytest

from inkwell.application.interfaces import IdentityProvider, ProfileRepository
from inkwell.application.schemas import (
    PasswordChangeRequest,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from inkwell.application.services import AuthService, ChangeFeed, ProfileService
from inkwell.application.services.profile_service import default_username
from inkwell.domain.entities import Actor, AuthSession, UserProfile
from inkwell.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
)


class FakeProfileRepository(ProfileRepository):
    def __init__(self):
        self.profiles: dict[str, UserProfile] = {}

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    async def create(self, profile: UserProfile) -> UserProfile:
        if profile.id in self.profiles:
            raise DuplicateEntityError("UserProfile", "id", profile.id)
        self.profiles[profile.id] = profile
        return profile

    async def update(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.id] = profile
        return profile


class FakeIdentityProvider(IdentityProvider):
    """Plain-text credentials and sequential tokens."""

    def __init__(self):
        self.passwords: dict[str, str] = {}
        self.actors: dict[str, Actor] = {}
        self.sessions: dict[str, Actor] = {}

    def _open(self, actor: Actor) -> AuthSession:
        token = f"token-{len(self.sessions) + 1}"
        self.sessions[token] = actor
        return AuthSession(actor=actor, access_token=token, expires_in=3600)

    async def sign_up(self, email: str, password: str) -> AuthSession:
        if email in self.actors:
            raise DuplicateEntityError("Identity", "email", email)
        actor = Actor(id=f"user-{len(self.actors) + 1}", email=email)
        self.actors[email] = actor
        self.passwords[email] = password
        return self._open(actor)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        if self.passwords.get(email) != password:
            raise AuthenticationError("Invalid login credentials")
        return self._open(self.actors[email])

    async def sign_out(self, access_token: str) -> Actor | None:
        return self.sessions.pop(access_token, None)

    async def resolve(self, access_token: str) -> Actor | None:
        return self.sessions.get(access_token)

    async def change_password(self, actor: Actor, new_password: str) -> None:
        self.passwords[actor.email] = new_password


# ── Profiles ─────────────────────────────────────────────────────────

def test_default_username_uses_email_local_part():
    assert default_username("jane.doe@example.com") == "jane.doe"


def test_default_username_falls_back_to_timestamp():
    assert default_username(None).startswith("user_")
    assert default_username("@example.com")[len("user_"):].isdigit()


@pytest.mark.asyncio
async def test_profile_is_created_on_first_lookup():
    repository = FakeProfileRepository()
    service = ProfileService(repository)
    actor = Actor(id="u1", email="writer@example.com")

    profile = await service.get_or_create_profile(actor)
    again = await service.get_or_create_profile(actor)

    assert profile.username == "writer"
    assert again is profile
    assert len(repository.profiles) == 1


@pytest.mark.asyncio
async def test_get_profile_not_found():
    with pytest.raises(EntityNotFoundError):
        await ProfileService(FakeProfileRepository()).get_profile("nobody")


@pytest.mark.asyncio
async def test_update_profile():
    service = ProfileService(FakeProfileRepository())
    actor = Actor(id="u1", email="writer@example.com")

    profile = await service.update_profile(actor, ProfileUpdate(avatar_url="/media/a.png"))

    assert profile.username == "writer"
    assert profile.avatar_url == "/media/a.png"


# ── Auth ─────────────────────────────────────────────────────────────

@pytest.fixture
def feed() -> ChangeFeed:
    return ChangeFeed()


@pytest.fixture
def profiles() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def auth(feed, profiles) -> AuthService:
    return AuthService(FakeIdentityProvider(), ProfileService(profiles), change_feed=feed)


@pytest.mark.asyncio
async def test_sign_up_creates_profile_with_chosen_username(auth: AuthService, profiles):
    session = await auth.sign_up(
        SignUpRequest(email="new@example.com", password="secret1", username="newbie")
    )

    assert profiles.profiles[session.actor.id].username == "newbie"
    assert await auth.current_actor(session.access_token) == session.actor


@pytest.mark.asyncio
async def test_sign_in_with_wrong_password(auth: AuthService):
    await auth.sign_up(SignUpRequest(email="a@example.com", password="secret1"))
    with pytest.raises(AuthenticationError):
        await auth.sign_in(SignInRequest(email="a@example.com", password="wrong"))


@pytest.mark.asyncio
async def test_session_changes_are_announced(auth: AuthService, feed: ChangeFeed):
    subscription = feed.subscribe("auth")

    session = await auth.sign_up(SignUpRequest(email="a@example.com", password="secret1"))
    await auth.change_password(session.actor, PasswordChangeRequest(password="secret2"))
    await auth.sign_out(session.access_token)
    await auth.sign_out(session.access_token)
    subscription.close()

    events = [e.change_type async for e in subscription.events()]
    assert events == ["SIGNED_IN", "USER_UPDATED", "SIGNED_OUT"]
    assert await auth.current_actor(session.access_token) is None


@pytest.mark.asyncio
async def test_changed_password_is_required_for_sign_in(auth: AuthService):
    session = await auth.sign_up(SignUpRequest(email="a@example.com", password="secret1"))
    await auth.change_password(session.actor, PasswordChangeRequest(password="secret2"))

    with pytest.raises(AuthenticationError):
        await auth.sign_in(SignInRequest(email="a@example.com", password="secret1"))
    assert (await auth.sign_in(SignInRequest(email="a@example.com", password="secret2"))).actor
