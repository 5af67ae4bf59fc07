"""Concrete repository implementation for user profiles backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.application.interfaces import ProfileRepository
from inkwell.domain.entities import UserProfile
from inkwell.domain.exceptions import EntityNotFoundError
from inkwell.infrastructure.database.models import UserProfileModel
from inkwell.infrastructure.database.repositories.common import gateway_errors


class SQLAlchemyProfileRepository(ProfileRepository):
    """Implements the ProfileRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserProfileModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            username=model.username,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        async with gateway_errors(self._session, "select profile"):
            model = await self._session.get(UserProfileModel, user_id)
        return self._to_entity(model) if model else None

    async def create(self, profile: UserProfile) -> UserProfile:
        model = UserProfileModel(
            id=profile.id,
            username=profile.username,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        async with gateway_errors(self._session, "insert profile", entity_type="UserProfile", value=profile.id):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, profile: UserProfile) -> UserProfile:
        async with gateway_errors(self._session, "update profile"):
            model = await self._session.get(UserProfileModel, profile.id)
            if model is None:
                raise EntityNotFoundError("UserProfile", profile.id)
            model.username = profile.username
            model.avatar_url = profile.avatar_url
            model.updated_at = profile.updated_at
            await self._session.flush()
        return self._to_entity(model)
