from .article_repository import ArticleRepository
from .comment_repository import CommentRepository
from .like_repository import LikeRepository
from .bookmark_repository import BookmarkRepository
from .profile_repository import ProfileRepository
from .identity_provider import IdentityProvider
from .object_storage import ObjectStorage, StoredObject

__all__ = [
    "ArticleRepository",
    "CommentRepository",
    "LikeRepository",
    "BookmarkRepository",
    "ProfileRepository",
    "IdentityProvider",
    "ObjectStorage",
    "StoredObject",
]
