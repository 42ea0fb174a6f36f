"""Pydantic schemas for API requests and responses."""

from accounts.schemas.users import (
    LoginResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
    UserWithHashResponse,
    user_payload,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "UserWithHashResponse",
    "MessageResponse",
    "LoginResponse",
    "user_payload",
]
