from .article_service import ArticleService
from .comment_service import CommentService
from .like_service import LikeService
from .bookmark_service import BookmarkService, BookmarkShelf
from .profile_service import ProfileService
from .auth_service import AuthService
from .image_service import ImageService
from .change_feed import ChangeFeed, Subscription

__all__ = [
    "ArticleService",
    "CommentService",
    "LikeService",
    "BookmarkService",
    "BookmarkShelf",
    "ProfileService",
    "AuthService",
    "ImageService",
    "ChangeFeed",
    "Subscription",
]
