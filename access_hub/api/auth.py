"""Authentication and user administration API routes."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.api.schemas import (
    AuthResponse,
    CredentialsPayload,
    RoleUpdateData,
    RoleUpdatedResponse,
    RoleUpdatePayload,
    UserPublic,
    UserResponse,
)
from access_hub.errors import AuthenticationError, NotFoundError
from access_hub.models.user import User, UserRole
from access_hub.services import get_async_session
from access_hub.services.auth_service import (
    REFRESH,
    Identity,
    bearer_scheme,
    decode_token,
    issue_tokens,
    require_role,
)
from access_hub.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User, message: str | None = None) -> AuthResponse:
    tokens = issue_tokens(user)
    return AuthResponse(
        message=message,
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        user=UserPublic.model_validate(user),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: CredentialsPayload, session: AsyncSession = Depends(get_async_session)
) -> AuthResponse:
    """Register an Employee account and sign it in."""
    user = await UserService(session).create_user(payload.username, payload.password)
    return _auth_response(user, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: CredentialsPayload, session: AsyncSession = Depends(get_async_session)
) -> AuthResponse:
    """Exchange username and password for a token pair."""
    user = await UserService(session).authenticate(payload.username, payload.password)
    logger.info("User %s logged in", user.id)
    return _auth_response(user, "Login successful")


@router.post("/refresh-token", response_model=AuthResponse, response_model_exclude_none=True)
async def refresh_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_async_session),
) -> AuthResponse:
    """Exchange a refresh token (Bearer header) for a new token pair."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Refresh token not found")

    claims = decode_token(credentials.credentials, REFRESH)
    user = await UserService(session).get_by_id(claims["sub"])
    if user is None:
        raise AuthenticationError("User not found", code="REFRESH_TOKEN_INVALID", http_status=403)
    return _auth_response(user)


@router.get("/get-user/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, session: AsyncSession = Depends(get_async_session)) -> UserResponse:
    """Fetch a user's public profile."""
    user = await UserService(session).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse(message="User retrieved successfully", user=UserPublic.model_validate(user))


@router.patch("/update-role/{user_id}", response_model=RoleUpdatedResponse)
async def update_role(
    user_id: str,
    payload: RoleUpdatePayload,
    admin: Identity = Depends(require_role(UserRole.ADMIN)),
    session: AsyncSession = Depends(get_async_session),
) -> RoleUpdatedResponse:
    """Change a user's role (Admin only)."""
    user = await UserService(session).update_role(user_id, payload.role, actor_id=admin.id)
    return RoleUpdatedResponse(
        message="User role updated successfully",
        data=RoleUpdateData(user=UserPublic.model_validate(user)),
    )
