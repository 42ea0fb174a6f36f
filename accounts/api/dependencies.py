"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.config import Settings
from accounts.database import get_db
from accounts.exceptions import InvalidTokenError
from accounts.services.sessions import SessionManager
from accounts.services.tokens import TokenIssuer
from accounts.services.users import UserRepository

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_session_manager(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> SessionManager:
    """Get session manager with dependencies."""
    return SessionManager(
        UserRepository(db),
        request.app.state.password_hasher,
        request.app.state.token_issuer,
    )


def get_current_user_id(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> str:
    """Get the id of the authenticated caller.

    The token is read from the Authorization header when one is sent,
    otherwise from the session cookie.
    """
    token = credentials.credentials if credentials else request.cookies.get(settings.cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = tokens.validate(token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return str(claims["id"])
