"""Schema-level defaults on the users table."""

import unittest

from sqlalchemy import text

from app.crud.users import UserRepository
from app.models import User, UserRole
from helpers import make_session_factory


class TestUserRoleDefault(unittest.TestCase):
    """role defaults to USER both in Python and in the database schema."""

    def test_server_default_declared(self) -> None:
        server_default = User.__table__.c.role.server_default
        self.assertIsNotNone(server_default)
        self.assertEqual(server_default.arg, UserRole.USER.value)

    def test_raw_insert_without_role_gets_user(self) -> None:
        db = make_session_factory()()
        try:
            db.execute(
                text(
                    "INSERT INTO users (username, email, password) "
                    "VALUES ('raw', 'raw@x.com', 'hash')"
                )
            )
            db.commit()
            self.assertEqual(UserRepository(db).find_one_by(username="raw").role, "USER")
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
