"""Software ORM model - a registered application users can request access to."""

import enum

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from access_hub.models import Base, BaseModel


class AccessLevel(str, enum.Enum):
    """Access tier, ordered Read < Write < Admin."""

    READ = "Read"
    WRITE = "Write"
    ADMIN = "Admin"


DEFAULT_ACCESS_LEVELS = [AccessLevel.WRITE.value, AccessLevel.READ.value, AccessLevel.ADMIN.value]


class Software(Base, BaseModel):
    """Registered software with the access tiers it can grant."""

    __tablename__ = "software"

    name: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, comment="Display name (unique, case-sensitive)"
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Use JSON for SQLite compatibility
    access_levels: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: list(DEFAULT_ACCESS_LEVELS),
        comment="Grantable access tiers",
    )

    access_requests: Mapped[list["AccessRequest"]] = relationship(  # noqa: F821
        "AccessRequest",
        back_populates="software",
    )

    def __repr__(self) -> str:
        return f"<Software(id={self.id}, name={self.name}, access_levels={self.access_levels})>"


__all__ = ["Software", "AccessLevel", "DEFAULT_ACCESS_LEVELS"]
