"""Registration, login and user record operations."""

import logging

from accounts.exceptions import DuplicateUsername, InvalidPassword, UserNotFound
from accounts.models.user import User
from accounts.services.passwords import PasswordHasher
from accounts.services.tokens import TokenIssuer
from accounts.services.users import UserRepository

logger = logging.getLogger(__name__)


class SessionManager:
    """Service for account and session operations.

    Holds no state between requests. Callers of the ``*_by_id`` methods are
    expected to have authenticated the request already.
    Logout has no counterpart here: it only clears the session cookie, which
    the route does.
    """

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, username: str, password: str, name: str | None = None) -> User:
        """Create a user with a hashed password.

        The lookup and the insert are not atomic; concurrent registrations of
        the same username are caught by the store's unique index instead.
        """
        if self.users.find_by_username(username) is not None:
            logger.info(f"Registration rejected, username taken: {username}")
            raise DuplicateUsername()

        password_hash = self.hasher.hash(password)
        user = self.users.insert(username, password_hash, name)
        logger.info(f"Registered user {user.id} ({username})")
        return user

    def login(self, username: str, password: str) -> tuple[str, User]:
        """Verify credentials and issue a session token.

        The username lookup happens before the password check, so callers can
        tell an unknown user from a wrong password.
        """
        user = self.users.find_by_username(username)
        if user is None:
            logger.info(f"Login failed, unknown username: {username}")
            raise UserNotFound()

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login failed, invalid password for {username}")
            raise InvalidPassword()

        token = self.tokens.issue(user.id, user.username, user.name)
        logger.info(f"User {user.id} logged in")
        return token, user

    def get_by_id(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFound()
        return user

    def update_by_id(
        self, user_id: str, username: str | None = None, name: str | None = None
    ) -> User:
        """Apply a partial update.

        Only non-empty values replace the stored ones, so a field cannot be
        cleared through this call.
        """
        user = self.get_by_id(user_id)
        if username:
            user.username = username
        if name:
            user.name = name
        return self.users.update(user)

    def delete_by_id(self, user_id: str) -> None:
        user = self.get_by_id(user_id)
        self.users.delete(user)
        logger.info(f"Deleted user {user_id}")

    def list_all(self) -> list[User]:
        return self.users.list_all()
