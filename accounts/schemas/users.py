"""User and session schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accounts.services.passwords import password_problem


def _check_password(value: str) -> str:
    problem = password_problem(value)
    if problem:
        raise ValueError(problem)
    return value


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)
    name: str | None = Field(None, max_length=255)

    @field_validator("password")
    @classmethod
    def password_supported(cls, value: str) -> str:
        return _check_password(value)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_supported(cls, value: str) -> str:
        return _check_password(value)


class UserUpdate(BaseModel):
    """Partial user update. Missing or empty fields keep their stored value."""

    username: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserWithHashResponse(UserResponse):
    """User information including the stored password hash."""

    password_hash: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """Login response; the token is also delivered as a cookie."""

    message: str
    token: str


def user_payload(user: Any, expose_password_hash: bool) -> dict[str, Any]:
    """Serialize a user record for a response body."""
    schema = UserWithHashResponse if expose_password_hash else UserResponse
    return schema.model_validate(user).model_dump(mode="json")
