"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CheckEmailRequest,
    CheckEmailResponse,
    CurrentUser,
    RefreshTokenRequest,
    SignInRequest,
    SignUpRequest,
    TokenPayload,
    TokenResponse,
    UpdateUserRequest,
    UserResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "CheckEmailRequest",
    "CheckEmailResponse",
    "CurrentUser",
    "HealthResponse",
    "RefreshTokenRequest",
    "SignInRequest",
    "SignUpRequest",
    "TokenPayload",
    "TokenResponse",
    "UpdateUserRequest",
    "UserResponse",
]
