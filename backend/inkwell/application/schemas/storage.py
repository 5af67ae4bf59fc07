"""Pydantic DTOs for image uploads."""

from pydantic import BaseModel


class StoredObjectResponse(BaseModel):
    path: str
    url: str
    size: int
    content_type: str

    model_config = {"from_attributes": True}
