"""Pydantic DTOs for comments."""

from datetime import datetime

from pydantic import BaseModel, Field

from .article import AuthorSchema


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    id: str
    article_id: str
    user_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: AuthorSchema | None = None

    model_config = {"from_attributes": True}
