"""Account service: sign up, sign in, token refresh, email check and profile update."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.security import (
    create_access_token,
    generate_salt,
    hash_password,
    verify_password,
)
from app.models.user import User, UserRole
from app.schemas.auth import (
    RefreshTokenRequest,
    SignInRequest,
    SignUpRequest,
    TokenPayload,
    TokenResponse,
    UpdateUserRequest,
)

if TYPE_CHECKING:
    from app.crud.users import UserRepository
    from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL).
PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_VIOLATION = "UNIQUE constraint failed"

INVALID_CREDENTIALS_MESSAGE = "Please check your login credentials"

# Columns that may be cleared with an explicit null in a profile update.
NULLABLE_UPDATE_FIELDS = frozenset({"tmdb_key"})


class AuthServiceError(Exception):
    """Base class for errors raised by AuthService."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(AuthServiceError):
    """Raised when a username or email is already taken."""


class UnauthorizedError(AuthServiceError):
    """Raised on bad credentials; unknown email and wrong password look the same."""


class NotFoundError(AuthServiceError):
    """Raised when the user record no longer exists."""


class InternalError(AuthServiceError):
    """Raised on any other persistence failure; details stay in the logs."""


@lru_cache
def _dummy_password_hash() -> str:
    """Hash checked against when the email is unknown, so both failures cost one bcrypt round."""
    return hash_password("unknown-account-placeholder")


def is_unique_violation(exc: IntegrityError) -> bool:
    """True if the driver error behind exc is a unique-constraint violation."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == PG_UNIQUE_VIOLATION
    return SQLITE_UNIQUE_VIOLATION in str(orig)


def _classify_persistence_error(exc: SQLAlchemyError, action: str) -> AuthServiceError:
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        logger.info("%s rejected: duplicate username or email", action)
        return ConflictError("Username or email already exists")
    logger.exception("%s failed with a persistence error", action)
    return InternalError("Internal server error")


class AuthService:
    """
    Orchestrates account flows over a UserRepository, bcrypt and PyJWT.

    Stateless apart from the repository handle; one instance per request is fine.
    """

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def sign_up(self, body: SignUpRequest) -> TokenResponse:
        """
        Hash the password, persist the new user, then issue a token.

        The token is built from the persisted record so it carries the real id.
        Duplicate username/email is left to the store's unique constraints.
        """
        salt = generate_salt()
        hashed_password = hash_password(body.password, salt)
        role = body.role or UserRole.USER
        user = self.users.create(
            username=body.username,
            password=hashed_password,
            email=str(body.email),
            tmdb_key=body.tmdb_key,
            role=role.value,
        )
        try:
            user = self.users.save(user)
        except SQLAlchemyError as e:
            raise _classify_persistence_error(e, "Sign-up") from e

        logger.info("Created user id=%s role=%s", user.id, user.role)
        return TokenResponse(access_token=self._create_token(user))

    def sign_in(self, body: SignInRequest) -> TokenResponse:
        """Verify email and password; the same error covers both failure causes."""
        user = self.users.find_one_by(email=str(body.email))
        if user is None:
            verify_password(body.password, _dummy_password_hash())
        if user is None or not verify_password(body.password, user.password):
            logger.warning("Sign-in rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("Sign-in succeeded for user id=%s", user.id)
        return TokenResponse(access_token=self._create_token(user))

    def refresh_token(self, body: RefreshTokenRequest) -> TokenResponse:
        """
        Re-sign the supplied claims without a lookup or password check.

        Callers must have validated the presented token already; the route
        does this with get_current_user.
        """
        claims = TokenPayload(
            id=body.id,
            username=body.username,
            email=body.email,
            role=body.role.value if body.role else None,
            tmdb_key=body.tmdb_key,
        )
        return TokenResponse(access_token=create_access_token(claims.model_dump()))

    def check_email(self, email: str) -> bool:
        return self.users.exists(email=email)

    def update_user(self, body: UpdateUserRequest, current_user: CurrentUser) -> TokenResponse:
        """
        Apply a partial update to the caller's record and sign the updated record.

        Only fields the caller sent are written. null clears tmdb_key and is
        ignored for the non-nullable columns.
        """
        values: dict[str, Any] = {
            field: value
            for field, value in body.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_UPDATE_FIELDS
        }
        if "password" in values:
            values["password"] = hash_password(values["password"])
        if "role" in values:
            values["role"] = UserRole(values["role"]).value
        if "email" in values:
            values["email"] = str(values["email"])

        try:
            matched = self.users.update(current_user.id, values)
        except SQLAlchemyError as e:
            raise _classify_persistence_error(e, "Profile update") from e
        if not matched:
            raise NotFoundError(f'User "{current_user.username}" not found!')

        user = self.get_user(current_user.id)
        logger.info(
            "Updated user id=%s fields=%s",
            user.id,
            ",".join(sorted(values)) or "-",
        )
        return TokenResponse(access_token=self._create_token(user))

    def get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f'User with id "{user_id}" not found!')
        return user

    def _create_token(self, user: User) -> str:
        claims = TokenPayload(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            tmdb_key=user.tmdb_key,
        )
        return create_access_token(claims.model_dump())
