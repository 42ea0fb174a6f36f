"""Signed session tokens carrying user identity claims."""

from typing import Any

from jose import JWTError, jwt

from accounts.config import Settings
from accounts.exceptions import InvalidTokenError

REQUIRED_CLAIMS = ("id", "username")


class TokenIssuer:
    """Issues and validates JWTs signed with the process-wide secret.

    Tokens carry no ``exp`` claim; their lifetime is bounded only by the
    expiry of the cookie that delivers them.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(settings.jwt_secret, settings.jwt_algorithm)

    def issue(self, user_id: str, username: str, name: str | None) -> str:
        """Create a token for the given identity."""
        claims = {"id": user_id, "username": username, "name": name}
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> dict[str, Any]:
        """Decode a token and return its claims.

        Raises InvalidTokenError when the signature does not verify or the
        identity claims are missing.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError() from e

        if any(not claims.get(claim) for claim in REQUIRED_CLAIMS):
            raise InvalidTokenError()
        return claims
