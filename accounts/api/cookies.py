"""Session cookie handling."""

from datetime import UTC, datetime, timedelta

from fastapi import Response

from accounts.config import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Deliver a session token as an http-only, cross-site, secure cookie."""
    max_age = settings.cookie_max_age_seconds
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=max_age,
        expires=datetime.now(UTC) + timedelta(seconds=max_age),
        path="/",
        httponly=True,
        secure=True,
        samesite="none",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Tell the client to drop its session cookie."""
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=True,
        samesite="none",
    )
