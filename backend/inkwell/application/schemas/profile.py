"""Pydantic DTOs for user profiles."""

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    username: str | None = Field(None, min_length=1, max_length=50)
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    id: str
    username: str
    avatar_url: str | None = None

    model_config = {"from_attributes": True}
