"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.config import get_settings
from inkwell.application.services import (
    ArticleService,
    AuthService,
    BookmarkService,
    ChangeFeed,
    CommentService,
    ImageService,
    LikeService,
    ProfileService,
)
from inkwell.domain.entities import Actor
from inkwell.infrastructure.database.session import get_db_session
from inkwell.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyBookmarkRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyLikeRepository,
    SQLAlchemyProfileRepository,
)
from inkwell.infrastructure.identity import SQLAlchemyIdentityProvider
from inkwell.infrastructure.storage.local_file_storage import LocalObjectStorage

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_change_feed() -> ChangeFeed:
    """Process-wide change feed shared by every request."""
    return ChangeFeed()


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService with the article, comment and like repositories wired up."""
    settings = get_settings()
    yield ArticleService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCommentRepository(session),
        SQLAlchemyLikeRepository(session),
        verify_attempts=settings.delete_verify_attempts,
        verify_delay_seconds=settings.delete_verify_delay_seconds,
    )


async def get_comment_service(
    session: AsyncSession = Depends(get_db_session),
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> AsyncGenerator[CommentService, None]:
    yield CommentService(
        SQLAlchemyCommentRepository(session),
        SQLAlchemyArticleRepository(session),
        change_feed=change_feed,
    )


async def get_like_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[LikeService, None]:
    yield LikeService(SQLAlchemyLikeRepository(session), SQLAlchemyArticleRepository(session))


async def get_bookmark_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BookmarkService, None]:
    yield BookmarkService(SQLAlchemyBookmarkRepository(session))


async def get_profile_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ProfileService, None]:
    yield ProfileService(SQLAlchemyProfileRepository(session))


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService backed by the built-in identity provider."""
    settings = get_settings()
    identity_provider = SQLAlchemyIdentityProvider(
        session,
        secret_key=settings.secret_key,
        max_age_seconds=settings.session_max_age_seconds,
        min_password_length=settings.min_password_length,
    )
    yield AuthService(
        identity_provider,
        ProfileService(SQLAlchemyProfileRepository(session)),
        change_feed=change_feed,
    )


async def get_image_service() -> AsyncGenerator[ImageService, None]:
    settings = get_settings()
    storage = LocalObjectStorage(
        upload_dir=settings.upload_dir,
        bucket=settings.image_bucket,
        url_prefix=settings.media_url_prefix,
    )
    yield ImageService(
        storage,
        allowed_types=settings.allowed_image_types,
        max_bytes=settings.max_upload_size_mb * 1024 * 1024,
    )


# ── Actor resolution ─────────────────────────────────────────────────


async def get_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    return credentials.credentials if credentials else None


async def get_optional_actor(
    token: str | None = Depends(get_access_token),
    auth: AuthService = Depends(get_auth_service),
) -> Actor | None:
    """The signed-in actor, or None for anonymous readers."""
    if not token:
        return None
    return await auth.current_actor(token)


async def get_current_actor(
    actor: Actor | None = Depends(get_optional_actor),
) -> Actor:
    """The signed-in actor; 401 when the request is anonymous or the token is invalid."""
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor
