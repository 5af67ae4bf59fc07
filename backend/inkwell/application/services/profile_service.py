"""Application service (use case) for user profiles."""

import logging
import time

from inkwell.application.interfaces import ProfileRepository
from inkwell.application.schemas import ProfileUpdate
from inkwell.domain.entities import Actor, UserProfile
from inkwell.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


def default_username(email: str | None) -> str:
    """Derive a username from the e-mail local part, or a timestamped fallback."""
    local_part = (email or "").split("@")[0].strip()
    return local_part or f"user_{int(time.time() * 1000)}"


class ProfileService:
    """Profile lookup with lazy creation for identities that have none yet."""

    def __init__(self, repository: ProfileRepository):
        self._repository = repository

    async def get_profile(self, user_id: str) -> UserProfile:
        profile = await self._repository.get_by_id(user_id)
        if profile is None:
            raise EntityNotFoundError("UserProfile", user_id)
        return profile

    async def get_or_create_profile(self, actor: Actor, username: str | None = None) -> UserProfile:
        profile = await self._repository.get_by_id(actor.id)
        if profile is not None:
            return profile

        logger.info("No profile for %s yet, creating one", actor.id)
        try:
            return await self._repository.create(
                UserProfile(id=actor.id, username=username or default_username(actor.email))
            )
        except DuplicateEntityError:
            # Created by a concurrent request in the meantime
            return await self.get_profile(actor.id)

    async def update_profile(self, actor: Actor, data: ProfileUpdate) -> UserProfile:
        profile = await self.get_or_create_profile(actor)
        profile.update(username=data.username, avatar_url=data.avatar_url)
        return await self._repository.update(profile)
