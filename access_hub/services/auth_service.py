"""Authentication helpers: password hashing, signed tokens, caller identity.

Access tokens are short-lived and carry the caller's id, username and role.
Refresh tokens live longer, are signed with a separate key and can only be
exchanged for a new token pair.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from access_hub.config import settings
from access_hub.errors import AuthenticationError, AuthorizationError
from access_hub.models.user import User, UserRole

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"

# Bearer token security; missing headers are reported by get_current_identity
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Verified caller, as asserted by a signed token."""

    id: str
    username: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, username=user.username, role=user.role)


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh tokens issued together."""

    access_token: str
    refresh_token: str


def hash_password(password: str) -> str:
    """Hash password with the configured bcrypt cost."""
    # Bcrypt has a 72 byte limit
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against a stored bcrypt hash."""
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def _secret_for(token_type: str) -> str:
    return settings.jwt_refresh_secret if token_type == REFRESH else settings.jwt_access_secret


def _create_token(user: User, token_type: str, expires_delta: timedelta) -> str:
    claims: Dict[str, Any] = {
        "sub": user.id,
        "username": user.username,
        "role": user.role.value,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, _secret_for(token_type), algorithm=settings.jwt_algorithm)


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return _create_token(user, ACCESS, expires_delta)


def create_refresh_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Create a signed refresh token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.refresh_token_expire_days)
    return _create_token(user, REFRESH, expires_delta)


def issue_tokens(user: User) -> TokenPair:
    """Issue a fresh access/refresh token pair."""
    return TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
    )


def decode_token(token: str, token_type: str = ACCESS) -> Dict[str, Any]:
    """Verify a token's signature, expiry and type.

    Args:
        token: Encoded JWT
        token_type: "access" or "refresh"

    Returns:
        Decoded claims

    Raises:
        AuthenticationError: TOKEN_EXPIRED (401) or TOKEN_INVALID (403);
            refresh tokens use the REFRESH_ prefixed codes
    """
    if token_type == REFRESH:
        prefix, label = "REFRESH_", "refresh token"
    else:
        prefix, label = "", "access token"

    invalid = AuthenticationError(
        f"Invalid {label}", code=f"{prefix}TOKEN_INVALID", http_status=403
    )
    try:
        payload = jwt.decode(token, _secret_for(token_type), algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        message = (
            "Refresh token has expired. Please login again."
            if token_type == REFRESH
            else "Access token has expired"
        )
        raise AuthenticationError(message, code=f"{prefix}TOKEN_EXPIRED") from None
    except JWTError:
        raise invalid from None

    if payload.get("type") != token_type or not payload.get("sub"):
        raise invalid
    return payload


def identity_from_claims(payload: Dict[str, Any]) -> Identity:
    """Build an Identity from decoded token claims."""
    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise AuthenticationError(
            "Invalid access token", code="TOKEN_INVALID", http_status=403
        ) from None
    return Identity(id=payload["sub"], username=payload.get("username", ""), role=role)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """FastAPI dependency: resolve the caller from the Bearer access token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token is required")
    return identity_from_claims(decode_token(credentials.credentials, ACCESS))


def require_role(role: UserRole):
    """Build a dependency that admits only callers holding ``role``."""

    async def _require_role(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role != role:
            logger.warning(
                "Non-%s attempted restricted operation: user_id=%s role=%s",
                role.value,
                identity.id,
                identity.role.value,
            )
            raise AuthorizationError(f"Access denied. {role.value} role required.")
        return identity

    return _require_role


__all__ = [
    "Identity",
    "TokenPair",
    "bearer_scheme",
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "issue_tokens",
    "decode_token",
    "identity_from_claims",
    "get_current_identity",
    "require_role",
]
