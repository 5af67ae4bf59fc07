"""Pydantic DTOs for authentication."""

from pydantic import BaseModel, Field

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignUpRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL_PATTERN, examples=["reader@example.com"])
    password: str = Field(..., min_length=1)
    username: str | None = Field(None, min_length=1, max_length=50)


class SignInRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class PasswordChangeRequest(BaseModel):
    password: str = Field(..., min_length=1)


class ActorResponse(BaseModel):
    id: str
    email: str

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: ActorResponse
