from .article import (
    Article,
    ArticlePage,
    AuthorSnapshot,
    DeletionMode,
    DeletionResult,
    SOFT_DELETE_PREFIX,
    DELETED_CONTENT_PLACEHOLDER,
    normalize_tags,
    soft_deleted_title,
)
from .comment import Comment
from .engagement import ArticleSnapshot, Bookmark, Like
from .profile import Actor, AuthSession, UserProfile
from .change_event import ChangeEvent, ChangeType

__all__ = [
    "Article",
    "ArticlePage",
    "AuthorSnapshot",
    "DeletionMode",
    "DeletionResult",
    "SOFT_DELETE_PREFIX",
    "DELETED_CONTENT_PLACEHOLDER",
    "normalize_tags",
    "soft_deleted_title",
    "Comment",
    "ArticleSnapshot",
    "Bookmark",
    "Like",
    "Actor",
    "AuthSession",
    "UserProfile",
    "ChangeEvent",
    "ChangeType",
]
