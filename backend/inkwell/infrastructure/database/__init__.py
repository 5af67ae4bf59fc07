from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    ArticleModel,
    ArticleTagModel,
    AuthSessionModel,
    BookmarkModel,
    CommentModel,
    IdentityModel,
    LikeModel,
    UserProfileModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "ArticleModel",
    "ArticleTagModel",
    "AuthSessionModel",
    "BookmarkModel",
    "CommentModel",
    "IdentityModel",
    "LikeModel",
    "UserProfileModel",
]
