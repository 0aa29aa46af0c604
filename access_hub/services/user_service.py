"""User service for registration, sign-in and role management."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from access_hub.models.user import User, UserRole
from access_hub.services.audit_service import AuditService
from access_hub.services.auth_service import hash_password, verify_password

logger = logging.getLogger(__name__)


def parse_role(value: Any) -> UserRole:
    """Parse a role label into a UserRole.

    Raises:
        ValidationError: Missing or unknown label
    """
    try:
        return UserRole(value)
    except ValueError:
        raise ValidationError("Invalid role. Must be one of: Admin, Manager, Employee") from None


class UserService:
    """Service for user-related operations."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def get_by_id(self, user_id: str) -> User | None:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """
        Get user by username.

        Args:
            username: Login name

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        username: str | None,
        password: str | None,
        role: UserRole = UserRole.EMPLOYEE,
    ) -> User:
        """
        Register a new user.

        Args:
            username: Unique login name
            password: Plain password, stored as a bcrypt hash
            role: Initial role (default: Employee)

        Returns:
            Created User

        Raises:
            ValidationError: Missing username or password
            ConflictError: Username already taken
        """
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("Username is required")
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required")
        username = username.strip()

        if await self.get_by_username(username):
            raise ConflictError("Username already exists")

        user = User(username=username, password_hash=hash_password(password), role=role)
        self.session.add(user)
        try:
            await self.session.flush()
            AuditService.log(
                self.session, "user", user.id, "create", changes={"role": role.value}
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Username already exists") from e

        logger.info("Registered user %s (%s) as %s", username, user.id, role.value)
        return user

    async def authenticate(self, username: str | None, password: str | None) -> User:
        """
        Verify credentials and return the matching user.

        Raises:
            ValidationError: Missing username or password
            AuthenticationError: Unknown user or wrong password
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = await self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for username %s", username)
            raise AuthenticationError("Invalid username or password")
        return user

    async def update_role(
        self, user_id: str | None, role: UserRole | str | None, actor_id: str | None = None
    ) -> User:
        """
        Change a user's role.

        Args:
            user_id: User to update
            role: New role label
            actor_id: Admin performing the change, for the audit log

        Returns:
            Updated User

        Raises:
            ValidationError: Missing user id or unknown role
            NotFoundError: User does not exist
        """
        if not user_id:
            raise ValidationError("User ID is required")
        new_role = parse_role(role)

        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        previous = user.role
        user.role = new_role
        AuditService.log(
            self.session,
            "user",
            user.id,
            "role_change",
            actor_id=actor_id,
            changes={"from": previous.value, "to": new_role.value},
        )
        await self.session.commit()

        logger.info("User %s role %s -> %s by %s", user.id, previous.value, new_role.value, actor_id)
        return user


__all__ = ["UserService", "parse_role"]
