"""Tests for the create_user CLI: validation, success and duplicate handling."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from app.crud.users import UserRepository
from app.scripts.create_user import main
from helpers import make_session_factory


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patcher = patch("app.scripts.create_user.SessionLocal", self.session_factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self.run_cli(
            "admin", "s3cure-password", "admin@x.com", "--role", "ADMIN", "--tmdb-key", "k1"
        )
        self.assertEqual(code, 0)
        self.assertIn("Created user 'admin'", out)
        db = self.session_factory()
        try:
            user = UserRepository(db).find_one_by(username="admin")
            self.assertEqual(user.role, "ADMIN")
            self.assertEqual(user.tmdb_key, "k1")
            self.assertNotEqual(user.password, "s3cure-password")
        finally:
            db.close()

    def test_short_password_rejected(self) -> None:
        code, _, err = self.run_cli("admin", "short", "admin@x.com")
        self.assertEqual(code, 1)
        self.assertIn("password", err)

    def test_duplicate_rejected(self) -> None:
        self.assertEqual(self.run_cli("admin", "s3cure-password", "admin@x.com")[0], 0)
        code, _, err = self.run_cli("admin", "s3cure-password", "admin@x.com")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)


if __name__ == "__main__":
    unittest.main()
