"""Shared helpers for the SQLAlchemy repositories."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.entities import AuthorSnapshot
from inkwell.domain.exceptions import DuplicateEntityError, PersistenceError
from inkwell.infrastructure.database.models import UserProfileModel


@asynccontextmanager
async def gateway_errors(
    session: AsyncSession,
    operation: str,
    *,
    entity_type: str = "Record",
    field: str = "id",
    value: str = "",
    savepoint: bool = False,
) -> AsyncIterator[None]:
    """Translate SQLAlchemy failures into domain errors.

    Unique-constraint violations become DuplicateEntityError; everything else
    becomes PersistenceError. By default the whole session is rolled back.
    With ``savepoint=True`` the block runs inside a SAVEPOINT and a failure
    only undoes the block itself, keeping earlier writes of the transaction.
    """
    try:
        if savepoint:
            async with session.begin_nested():
                yield
        else:
            yield
    except IntegrityError as exc:
        if not savepoint:
            await session.rollback()
        if "unique" in str(exc.orig).lower() or "duplicate" in str(exc.orig).lower():
            raise DuplicateEntityError(entity_type, field, value) from exc
        raise PersistenceError(operation, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        if not savepoint:
            await session.rollback()
        raise PersistenceError(operation, str(exc)) from exc


def author_snapshot(profile: UserProfileModel | None) -> AuthorSnapshot | None:
    """Map a joined profile row → AuthorSnapshot (None when the profile is missing)."""
    if profile is None:
        return None
    return AuthorSnapshot(id=profile.id, username=profile.username, avatar_url=profile.avatar_url)
