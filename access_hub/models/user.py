"""User ORM model with a single role."""

import enum

from sqlalchemy import Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from access_hub.models import Base, BaseModel


class UserRole(str, enum.Enum):
    """Role held by a user."""

    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    ADMIN = "Admin"


class User(Base, BaseModel):
    """
    Person who can sign in and request software access.

    Role semantics:
    - Employee: browse software and submit access requests
    - Manager: approve/reject access requests
    - Admin: change user roles

    The role is owned by the admin flow (UserService.update_role), not by the
    request workflow.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, comment="Login name"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="bcrypt hash of the password"
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=UserRole.EMPLOYEE,
        nullable=False,
        comment="Employee/Manager/Admin",
    )

    access_requests: Mapped[list["AccessRequest"]] = relationship(  # noqa: F821
        "AccessRequest",
        back_populates="user",
    )

    __table_args__ = (Index("idx_users_role", "role"),)

    def has_role(self, role: UserRole) -> bool:
        """Check if user holds exactly this role."""
        return self.role == role

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role.value})>"


__all__ = ["User", "UserRole"]
