"""Identity provider interface — abstracts sign-up, sign-in and token resolution."""

from abc import ABC, abstractmethod

from inkwell.domain.entities import Actor, AuthSession


class IdentityProvider(ABC):
    """Port for authentication.

    Implementations raise AuthenticationError for bad credentials and
    DuplicateEntityError when signing up an e-mail that is already taken.
    """

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> AuthSession:
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> Actor | None:
        """Revoke a session. Returns the actor it belonged to, if any."""
        ...

    @abstractmethod
    async def resolve(self, access_token: str) -> Actor | None:
        """Return the actor behind a valid, unrevoked token; None otherwise."""
        ...

    @abstractmethod
    async def change_password(self, actor: Actor, new_password: str) -> None:
        ...
