"""Credential store: persistence of user records."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.exceptions import CredentialStoreError, DuplicateUsername
from accounts.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access for users over a SQLAlchemy session.

    Driver failures surface as CredentialStoreError; a violated username
    uniqueness constraint surfaces as DuplicateUsername.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            raise self._store_error(e) from e

    def find_by_id(self, user_id: str) -> User | None:
        """Get a user by id."""
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._store_error(e) from e

    def list_all(self) -> list[User]:
        """Get every user."""
        try:
            return self.db.query(User).order_by(User.created_at, User.id).all()
        except SQLAlchemyError as e:
            raise self._store_error(e) from e

    def insert(self, username: str, password_hash: str, name: str | None = None) -> User:
        """Create a new user. The store assigns the id."""
        user = User(username=username, password_hash=password_hash, name=name)
        self.db.add(user)
        self._commit(refresh=user)
        return user

    def update(self, user: User) -> User:
        """Persist changes made to a loaded user."""
        self._commit(refresh=user)
        return user

    def delete(self, user: User) -> None:
        """Remove a user."""
        self.db.delete(user)
        self._commit()

    def _commit(self, refresh: User | None = None) -> None:
        try:
            self.db.commit()
            if refresh is not None:
                self.db.refresh(refresh)
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsername() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._store_error(e) from e

    @staticmethod
    def _store_error(error: SQLAlchemyError) -> CredentialStoreError:
        logger.error(f"Credential store failure: {error}")
        return CredentialStoreError(str(error))
