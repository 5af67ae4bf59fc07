"""Application service for sign-up, sign-in and session changes.

Each session change is announced on the change feed's ``auth`` table so
listeners can react to sign-in and sign-out.
"""

import logging

from inkwell.application.interfaces import IdentityProvider
from inkwell.application.schemas import PasswordChangeRequest, SignInRequest, SignUpRequest
from inkwell.application.services.change_feed import ChangeFeed
from inkwell.application.services.profile_service import ProfileService
from inkwell.domain.entities import Actor, AuthSession, ChangeEvent

logger = logging.getLogger(__name__)

AUTH_TABLE = "auth"


class AuthService:
    """Wraps the identity provider and keeps profiles in step with identities."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        profile_service: ProfileService,
        change_feed: ChangeFeed | None = None,
    ):
        self._identity = identity_provider
        self._profiles = profile_service
        self._feed = change_feed

    async def sign_up(self, data: SignUpRequest) -> AuthSession:
        session = await self._identity.sign_up(data.email, data.password)
        await self._profiles.get_or_create_profile(session.actor, username=data.username)
        logger.info("Signed up %s", session.actor.email)
        await self._announce("SIGNED_IN", session.actor)
        return session

    async def sign_in(self, data: SignInRequest) -> AuthSession:
        session = await self._identity.sign_in(data.email, data.password)
        await self._profiles.get_or_create_profile(session.actor)
        await self._announce("SIGNED_IN", session.actor)
        return session

    async def sign_out(self, access_token: str) -> None:
        actor = await self._identity.sign_out(access_token)
        if actor is not None:
            await self._announce("SIGNED_OUT", actor)

    async def current_actor(self, access_token: str) -> Actor | None:
        return await self._identity.resolve(access_token)

    async def change_password(self, actor: Actor, data: PasswordChangeRequest) -> None:
        await self._identity.change_password(actor, data.password)
        await self._announce("USER_UPDATED", actor)

    async def _announce(self, event: str, actor: Actor) -> None:
        if self._feed is None:
            return
        await self._feed.publish(
            ChangeEvent(
                table=AUTH_TABLE,
                change_type=event,
                new={"user_id": actor.id, "email": actor.email},
            )
        )
