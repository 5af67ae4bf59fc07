from .article import ArticleModel, ArticleTagModel
from .comment import CommentModel
from .engagement import BookmarkModel, LikeModel
from .profile import UserProfileModel
from .identity import AuthSessionModel, IdentityModel

__all__ = [
    "ArticleModel",
    "ArticleTagModel",
    "CommentModel",
    "BookmarkModel",
    "LikeModel",
    "UserProfileModel",
    "AuthSessionModel",
    "IdentityModel",
]
