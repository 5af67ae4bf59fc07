"""Built-in identity provider — credentials in the database, signed session tokens.

Passwords are hashed with werkzeug's ``generate_password_hash``. An access
token is an itsdangerous-signed reference to a row in ``auth_sessions``;
signing out deletes the row, which revokes the token even before it expires.
"""

import logging
from uuid import uuid4

from itsdangerous import BadSignature, URLSafeTimedSerializer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from inkwell.application.interfaces import IdentityProvider
from inkwell.domain.entities import Actor, AuthSession
from inkwell.domain.exceptions import AuthenticationError, DuplicateEntityError, EntityNotFoundError
from inkwell.infrastructure.database.models import AuthSessionModel, IdentityModel
from inkwell.infrastructure.database.repositories.common import gateway_errors

logger = logging.getLogger(__name__)

_TOKEN_SALT = "inkwell.auth-session"


class SQLAlchemyIdentityProvider(IdentityProvider):
    """Implements the IdentityProvider port on top of the application database."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        secret_key: str,
        max_age_seconds: int,
        min_password_length: int = 6,
    ):
        self._session = session
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_TOKEN_SALT)
        self._max_age = max_age_seconds
        self._min_password_length = min_password_length

    def _validate_password(self, password: str) -> None:
        if len(password) < self._min_password_length:
            raise ValueError(
                f"Password should be at least {self._min_password_length} characters"
            )

    async def _find_by_email(self, email: str) -> IdentityModel | None:
        stmt = select(IdentityModel).where(IdentityModel.email == email)
        async with gateway_errors(self._session, "select identity"):
            return (await self._session.execute(stmt)).scalar_one_or_none()

    async def _open_session(self, identity: IdentityModel) -> AuthSession:
        session_row = AuthSessionModel(id=str(uuid4()), identity_id=identity.id)
        async with gateway_errors(self._session, "insert auth session"):
            self._session.add(session_row)
            await self._session.flush()
        token = self._serializer.dumps({"sid": session_row.id})
        return AuthSession(
            actor=Actor(id=identity.id, email=identity.email),
            access_token=token,
            expires_in=self._max_age,
        )

    async def _session_row(self, access_token: str) -> AuthSessionModel | None:
        try:
            payload = self._serializer.loads(access_token, max_age=self._max_age)
        except BadSignature:
            # Also covers SignatureExpired
            return None
        session_id = payload.get("sid") if isinstance(payload, dict) else None
        if not session_id:
            return None
        async with gateway_errors(self._session, "select auth session"):
            return await self._session.get(AuthSessionModel, session_id)

    async def sign_up(self, email: str, password: str) -> AuthSession:
        email = email.strip().lower()
        self._validate_password(password)
        if await self._find_by_email(email) is not None:
            raise DuplicateEntityError("Identity", "email", email)

        identity = IdentityModel(
            id=str(uuid4()),
            email=email,
            password_hash=generate_password_hash(password),
        )
        async with gateway_errors(self._session, "insert identity", entity_type="Identity", field="email", value=email):
            self._session.add(identity)
            await self._session.flush()
        logger.info("Registered identity %s", identity.id)
        return await self._open_session(identity)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        identity = await self._find_by_email(email.strip().lower())
        if identity is None or not check_password_hash(identity.password_hash, password):
            logger.info("Rejected sign-in for %s", email)
            raise AuthenticationError("Invalid login credentials")
        return await self._open_session(identity)

    async def sign_out(self, access_token: str) -> Actor | None:
        session_row = await self._session_row(access_token)
        if session_row is None:
            return None
        actor = await self._actor_for(session_row.identity_id)
        async with gateway_errors(self._session, "delete auth session"):
            await self._session.delete(session_row)
            await self._session.flush()
        return actor

    async def resolve(self, access_token: str) -> Actor | None:
        session_row = await self._session_row(access_token)
        if session_row is None:
            return None
        return await self._actor_for(session_row.identity_id)

    async def change_password(self, actor: Actor, new_password: str) -> None:
        self._validate_password(new_password)
        async with gateway_errors(self._session, "update identity"):
            identity = await self._session.get(IdentityModel, actor.id)
            if identity is None:
                raise EntityNotFoundError("Identity", actor.id)
            identity.password_hash = generate_password_hash(new_password)
            await self._session.flush()

    async def _actor_for(self, identity_id: str) -> Actor | None:
        async with gateway_errors(self._session, "select identity"):
            identity = await self._session.get(IdentityModel, identity_id)
        return Actor(id=identity.id, email=identity.email) if identity else None
