"""ORM model for application user accounts."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Roles a user account can hold; stored as the plain string value."""

    USER = "USER"
    ADMIN = "ADMIN"
    SUPERUSER = "SUPERUSER"


class User(Base):
    """
    User account for JWT authentication.

    password holds the bcrypt hash, never the plain password.
    tmdb_key is the account's third-party movie database API key.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        String(32),
        nullable=False,
        default=UserRole.USER.value,
        server_default=UserRole.USER.value,
    )
    tmdb_key = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
