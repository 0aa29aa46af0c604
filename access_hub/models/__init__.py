"""SQLAlchemy base model with common fields and model exports."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Base class for all models
Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BaseModel:
    """Base model with a UUID primary key and timestamp fields."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


# Import models to register them with Base (after Base is defined)
# This must be after Base declaration to avoid circular imports
from access_hub.models.user import User, UserRole  # noqa: E402
from access_hub.models.software import AccessLevel, DEFAULT_ACCESS_LEVELS, Software  # noqa: E402
from access_hub.models.access_request import AccessRequest, RequestStatus  # noqa: E402
from access_hub.models.audit_log import AuditLog  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "UserRole",
    "Software",
    "AccessLevel",
    "DEFAULT_ACCESS_LEVELS",
    "AccessRequest",
    "RequestStatus",
    "AuditLog",
]
