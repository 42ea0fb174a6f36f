"""User account API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from accounts.api.cookies import clear_session_cookie, set_session_cookie
from accounts.api.dependencies import get_app_settings, get_current_user_id, get_session_manager
from accounts.config import Settings
from accounts.exceptions import (
    AuthError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from accounts.schemas.users import (
    LoginResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserUpdate,
    user_payload,
)
from accounts.services.sessions import SessionManager

router = APIRouter(prefix="/api/v1/users", tags=["users"])

Manager = Annotated[SessionManager, Depends(get_session_manager)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]


def _server_error(error: UnexpectedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.detail)


def _not_found(error: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.detail)


def _bad_request(error: ValidationError | NotFoundError | AuthError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.detail)


@router.post("/register")
async def register(user_data: UserRegister, manager: Manager, settings: AppSettings) -> dict[str, Any]:
    """Register a new user."""
    try:
        user = manager.register(user_data.username, user_data.password, user_data.name)
    except ValidationError as e:
        raise _bad_request(e) from e
    except UnexpectedError as e:
        raise _server_error(e) from e

    return {"message": "User registered", "user": user_payload(user, settings.expose_password_hash)}


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    manager: Manager,
    settings: AppSettings,
):
    """Login with username and password."""
    try:
        token, _ = manager.login(credentials.username, credentials.password)
    except (NotFoundError, AuthError) as e:
        raise _bad_request(e) from e
    except UnexpectedError as e:
        raise _server_error(e) from e

    set_session_cookie(response, token, settings)
    return LoginResponse(message="Login successful", token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: AppSettings):
    """Logout by clearing the session cookie.

    Tokens already issued stay valid until their cookie expires.
    """
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logout successful")


@router.get("/me")
async def get_me(user_id: CurrentUserId, manager: Manager, settings: AppSettings) -> dict[str, Any]:
    """Get current user information."""
    return _get_user(manager, user_id, settings)


@router.put("/me")
async def update_me(
    user_data: UserUpdate,
    user_id: CurrentUserId,
    manager: Manager,
    settings: AppSettings,
) -> dict[str, Any]:
    """Update the current user's username or name."""
    return _update_user(manager, user_id, user_data, settings)


@router.delete("/me", response_model=MessageResponse)
async def delete_me(
    response: Response,
    user_id: CurrentUserId,
    manager: Manager,
    settings: AppSettings,
):
    """Delete the current user and end their session."""
    _delete_user(manager, user_id)
    clear_session_cookie(response, settings)
    return MessageResponse(message="User deleted")


@router.get("")
async def list_users(_: CurrentUserId, manager: Manager, settings: AppSettings) -> dict[str, Any]:
    """Get all users."""
    try:
        users = manager.list_all()
    except UnexpectedError as e:
        raise _server_error(e) from e

    return {
        "message": "Users found",
        "users": [user_payload(user, settings.expose_password_hash) for user in users],
    }


@router.get("/{user_id}")
async def get_user(
    user_id: str, _: CurrentUserId, manager: Manager, settings: AppSettings
) -> dict[str, Any]:
    """Get a user by id."""
    return _get_user(manager, user_id, settings)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    _: CurrentUserId,
    manager: Manager,
    settings: AppSettings,
) -> dict[str, Any]:
    """Update a user by id."""
    return _update_user(manager, user_id, user_data, settings)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, _: CurrentUserId, manager: Manager):
    """Delete a user by id."""
    _delete_user(manager, user_id)
    return MessageResponse(message="User deleted")


def _get_user(manager: SessionManager, user_id: str, settings: Settings) -> dict[str, Any]:
    try:
        user = manager.get_by_id(user_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    except UnexpectedError as e:
        raise _server_error(e) from e

    return {"message": "User found", "user": user_payload(user, settings.expose_password_hash)}


def _update_user(
    manager: SessionManager, user_id: str, user_data: UserUpdate, settings: Settings
) -> dict[str, Any]:
    try:
        user = manager.update_by_id(user_id, username=user_data.username, name=user_data.name)
    except NotFoundError as e:
        raise _not_found(e) from e
    except ValidationError as e:
        raise _bad_request(e) from e
    except UnexpectedError as e:
        raise _server_error(e) from e

    return {"message": "User updated", "user": user_payload(user, settings.expose_password_hash)}


def _delete_user(manager: SessionManager, user_id: str) -> None:
    try:
        manager.delete_by_id(user_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    except UnexpectedError as e:
        raise _server_error(e) from e
