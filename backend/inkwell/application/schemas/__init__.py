from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticlePageResponse,
    AuthorSchema,
    DeletionResponse,
)
from .comment import CommentCreate, CommentUpdate, CommentResponse
from .engagement import (
    ArticleSnapshotSchema,
    BookmarkResponse,
    BookmarkToggleResponse,
    LikeStatusResponse,
)
from .profile import ProfileResponse, ProfileUpdate
from .auth import (
    ActorResponse,
    PasswordChangeRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
)
from .storage import StoredObjectResponse

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticlePageResponse",
    "AuthorSchema",
    "DeletionResponse",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "ArticleSnapshotSchema",
    "BookmarkResponse",
    "BookmarkToggleResponse",
    "LikeStatusResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "ActorResponse",
    "PasswordChangeRequest",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "StoredObjectResponse",
]
