"""Account endpoints (signup, signin, refresh, email check, profile update) and the bearer dependency."""

from typing import Annotated, NoReturn

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import decode_access_token
from app.crud.users import UserRepository
from app.schemas.auth import (
    CheckEmailRequest,
    CheckEmailResponse,
    CurrentUser,
    RefreshTokenRequest,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UpdateUserRequest,
    UserResponse,
)
from app.services.auth import (
    AuthService,
    AuthServiceError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)

_BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_auth_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
    """Dependency: AuthService bound to the request's DB session."""
    return AuthService(UserRepository(db))


def _raise_http(e: AuthServiceError) -> NoReturn:
    if isinstance(e, ConflictError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    if isinstance(e, UnauthorizedError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers=_BEARER_HEADERS,
        ) from e
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    ) from e


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_BEARER_HEADERS,
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_BEARER_HEADERS,
        )
    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers=_BEARER_HEADERS,
        )
    try:
        user = service.get_user(user_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers=_BEARER_HEADERS,
        )
    return CurrentUser.model_validate(user)


def _claims_match(body: RefreshTokenRequest, current_user: CurrentUser) -> bool:
    """True if every identity claim present in body equals the bearer's stored value."""
    supplied = {
        "id": body.id,
        "username": body.username,
        "email": body.email,
        "role": body.role.value if body.role else None,
    }
    return all(
        value is None or value == getattr(current_user, field)
        for field, value in supplied.items()
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    body: SignUpRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Create an account and return an access token for it."""
    try:
        return service.sign_up(body)
    except AuthServiceError as e:
        _raise_http(e)


@router.post("/signin", response_model=TokenResponse)
def sign_in(
    body: SignInRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        return service.sign_in(body)
    except AuthServiceError as e:
        _raise_http(e)


@router.post("/refresh-token", response_model=TokenResponse)
def refresh_token(
    body: RefreshTokenRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TokenResponse:
    """
    Re-issue a token from the supplied claims.

    The bearer token is validated by get_current_user and the identity claims
    in the body (id, username, email, role) must match its user; the claims
    are then signed without another lookup.
    """
    if not _claims_match(body, current_user):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token claims do not match the authenticated user",
            headers=_BEARER_HEADERS,
        )
    return service.refresh_token(body.model_copy(update={"id": current_user.id}))


@router.post("/check-email", response_model=CheckEmailResponse)
def check_email(
    body: CheckEmailRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> CheckEmailResponse:
    return CheckEmailResponse(exists=service.check_email(str(body.email)))


@router.patch("/userupdate", response_model=TokenResponse)
def update_user(
    body: UpdateUserRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TokenResponse:
    """Update the caller's profile; the returned token reflects the new values."""
    try:
        return service.update_user(body, current_user)
    except AuthServiceError as e:
        _raise_http(e)


@router.get("/userinfo", response_model=UserResponse)
def get_user_info(
    service: Annotated[AuthService, Depends(get_auth_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Return the caller's stored profile (no password)."""
    try:
        user = service.get_user(current_user.id)
    except AuthServiceError as e:
        _raise_http(e)
    return UserResponse.model_validate(user)
