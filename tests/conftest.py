"""Test environment: in-memory SQLite, cheap bcrypt rounds, fixed JWT secret.

Set before any app module is imported, since settings are read at import time.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-use-only-0123456789")
os.environ.setdefault("JWT_EXPIRE_MINUTES", "15")
