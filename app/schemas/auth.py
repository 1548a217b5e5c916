"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import UserRole


class SignUpRequest(BaseModel):
    """Fields needed to create an account."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    email: EmailStr = Field(..., description="Email address")
    tmdb_key: str | None = Field(
        default=None, max_length=255, description="Third-party movie database API key"
    )
    role: UserRole | None = Field(default=None, description="Role; USER when omitted")


class SignInRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RefreshTokenRequest(BaseModel):
    """Claims of a previously issued token, re-signed as-is."""

    id: int | None = None
    username: str | None = None
    email: str | None = None
    role: UserRole | None = None
    tmdb_key: str | None = None


class CheckEmailRequest(BaseModel):
    """Email to look up."""

    email: EmailStr


class CheckEmailResponse(BaseModel):
    """Whether an account with the email exists."""

    exists: bool


class UpdateUserRequest(BaseModel):
    """Partial profile update; only fields that are set are written."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8, max_length=128)
    tmdb_key: str | None = Field(default=None, max_length=255)
    role: UserRole | None = None


class TokenResponse(BaseModel):
    """JWT access token returned by signup, signin, refresh and update."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class TokenPayload(BaseModel):
    """Claims embedded in an access token (time claims excluded)."""

    id: int | None = None
    username: str | None = None
    email: str | None = None
    role: str | None = None
    tmdb_key: str | None = None


class CurrentUser(BaseModel):
    """Authenticated user resolved from a bearer token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
    tmdb_key: str | None = None


class UserResponse(CurrentUser):
    """User profile without the password hash."""
