from .article_repository import SQLAlchemyArticleRepository
from .comment_repository import SQLAlchemyCommentRepository
from .like_repository import SQLAlchemyLikeRepository
from .bookmark_repository import SQLAlchemyBookmarkRepository
from .profile_repository import SQLAlchemyProfileRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCommentRepository",
    "SQLAlchemyLikeRepository",
    "SQLAlchemyBookmarkRepository",
    "SQLAlchemyProfileRepository",
]
