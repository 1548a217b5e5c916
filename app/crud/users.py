"""Repository over the users table: find-by-field, insert and update."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.user import User


class UserRepository:
    """
    Thin wrapper over a SQLAlchemy session for User records.

    Write methods commit on success and roll back on failure; SQLAlchemy
    exceptions are re-raised for the caller to classify.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_one_by(self, **filters: Any) -> User | None:
        """Return the first user whose columns equal the given values, or None."""
        stmt = select(User).filter_by(**filters).limit(1)
        return self.db.execute(stmt).scalars().first()

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id, populate_existing=True)

    def exists(self, **filters: Any) -> bool:
        return self.find_one_by(**filters) is not None

    def create(self, **fields: Any) -> User:
        """Build a transient User; nothing is written until save()."""
        return User(**fields)

    def save(self, user: User) -> User:
        """Insert or flush the user, commit, and reload server-generated columns."""
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def update(self, user_id: int, values: dict[str, Any]) -> int:
        """Apply a partial update to one user by id; return the number of rows matched."""
        if not values:
            return 1 if self.get(user_id) is not None else 0
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return result.rowcount
