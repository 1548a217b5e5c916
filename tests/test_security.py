"""Unit tests for app.core.security: bcrypt hashing and JWT issue/decode."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_salt,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password stores a salted bcrypt hash; verify_password checks it."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("p@ss1234")
        self.assertNotEqual(hashed, "p@ss1234")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("p@ss1234", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("p@ss1234")
        self.assertFalse(verify_password("wrong", hashed))

    def test_fresh_salt_per_hash(self) -> None:
        self.assertNotEqual(hash_password("same-password"), hash_password("same-password"))

    def test_explicit_salt_is_used(self) -> None:
        salt = generate_salt()
        hashed = hash_password("p@ss1234", salt)
        self.assertTrue(hashed.startswith(salt.decode("utf-8")))

    def test_salt_uses_configured_rounds(self) -> None:
        salt = generate_salt()
        self.assertIn(f"${settings.BCRYPT_ROUNDS:02d}$", salt.decode("utf-8"))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("p@ss1234", "not-a-bcrypt-hash"))

    def test_only_first_72_bytes_count(self) -> None:
        base = "a" * 72
        hashed = hash_password(base + "tail-one")
        self.assertTrue(verify_password(base + "tail-two", hashed))


class TestAccessToken(unittest.TestCase):
    """create_access_token signs claims with iat/exp; decode_access_token validates."""

    def test_claims_survive_signing(self) -> None:
        claims = {"id": 7, "username": "alice", "email": "a@x.com", "role": "USER", "tmdb_key": "k1"}
        payload = decode_access_token(create_access_token(claims))
        for key, value in claims.items():
            self.assertEqual(payload[key], value)
        self.assertIn("iat", payload)
        self.assertIn("exp", payload)

    def test_expiry_matches_setting(self) -> None:
        payload = decode_access_token(create_access_token({"id": 1}))
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_EXPIRE_MINUTES * 60)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"id": 1, "iat": past - timedelta(minutes=1), "exp": past},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_signature_rejected(self) -> None:
        token = jwt.encode({"id": 1}, "some-other-secret-that-is-also-long-enough-0123", algorithm="HS256")
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
