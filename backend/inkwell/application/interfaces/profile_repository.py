"""Abstract repository interface (port) for user profiles."""

from abc import ABC, abstractmethod

from inkwell.domain.entities import UserProfile


class ProfileRepository(ABC):
    """Port for user profile persistence."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> UserProfile | None:
        ...

    @abstractmethod
    async def create(self, profile: UserProfile) -> UserProfile:
        """Insert a profile. Raises DuplicateEntityError if one already exists."""
        ...

    @abstractmethod
    async def update(self, profile: UserProfile) -> UserProfile:
        ...
