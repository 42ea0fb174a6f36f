"""User model."""

from uuid import uuid4

from sqlalchemy import Column, String

from accounts.database import Base
from accounts.models.mixins import TimestampMixin


def generate_user_id() -> str:
    """Opaque identifier assigned by the store on insert."""
    return uuid4().hex


class User(Base, TimestampMixin):
    """User record for authentication and profile data."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_user_id)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
