"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from inkwell.domain.entities import SOFT_DELETE_PREFIX


def _clean_title(value: str | None) -> str | None:
    """Strip a title; blank titles and the deletion marker are rejected."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Title must not be blank")
    if value.startswith(SOFT_DELETE_PREFIX):
        raise ValueError(f"Title must not start with '{SOFT_DELETE_PREFIX}'")
    return value


class AuthorSchema(BaseModel):
    id: str
    username: str
    avatar_url: str | None = None

    model_config = {"from_attributes": True}


class ArticleCreate(BaseModel):
    """Schema for creating a new article. Drafts unless ``published`` is set."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Getting Started"])
    content: str = Field("", examples=["<p>Hello, world.</p>"])
    tags: list[str] = Field(default_factory=list, examples=[["react", "javascript"]])
    published: bool = False
    featured_image_url: str | None = None
    featured_image_path: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str | None:
        return _clean_title(value)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional.

    Only fields present in the request body are written; an explicit
    ``null`` clears the featured image.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    tags: list[str] | None = None
    published: bool | None = None
    featured_image_url: str | None = None
    featured_image_path: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str | None:
        return _clean_title(value)


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    content: str
    tags: list[str]
    author_id: str
    published: bool
    featured_image_url: str | None = None
    featured_image_path: str | None = None
    created_at: datetime
    updated_at: datetime
    author: AuthorSchema | None = None
    comments_count: int = 0
    likes_count: int = 0

    model_config = {"from_attributes": True}


class ArticlePageResponse(BaseModel):
    items: list[ArticleResponse]
    total: int
    skip: int
    limit: int


class DeletionResponse(BaseModel):
    """Terminal outcome of a delete — ``warning`` flags a degraded deletion."""

    article_id: str
    success: bool
    mode: str
    warning: str | None = None
