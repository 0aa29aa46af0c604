"""AccessRequest ORM model for tracking software access requests (audit log)."""

import enum

from sqlalchemy import Enum, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from access_hub.models import Base, BaseModel
from access_hub.models.software import AccessLevel


class RequestStatus(str, enum.Enum):
    """Enumeration for request status."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class AccessRequest(Base, BaseModel):
    """
    A user's request for a tier of access to one software entry.

    Rows are never deleted; together they are the history of every decision.
    At most one row per (user_id, software_id) may be Pending; the partial
    unique index below enforces it in the database.

    Timestamps:
    - created_at: When the request was submitted
    - updated_at: Last status change
    """

    __tablename__ = "access_requests"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True, comment="Requester"
    )
    software_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("software.id"), nullable=False, index=True
    )
    access_type: Mapped[AccessLevel] = mapped_column(
        Enum(AccessLevel, native_enum=False, values_callable=_enum_values),
        nullable=False,
        comment="Requested tier: Read/Write/Admin",
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False, comment="Trimmed justification")
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, native_enum=False, values_callable=_enum_values),
        default=RequestStatus.PENDING,
        nullable=False,
        index=True,
        comment="Status: Pending/Approved/Rejected",
    )

    user: Mapped["User"] = relationship("User", back_populates="access_requests")  # noqa: F821
    software: Mapped["Software"] = relationship(  # noqa: F821
        "Software", back_populates="access_requests"
    )

    __table_args__ = (
        Index("idx_user_software_status", "user_id", "software_id", "status"),
        Index(
            "uq_pending_request_per_user_software",
            "user_id",
            "software_id",
            unique=True,
            sqlite_where=text("status = 'Pending'"),
            postgresql_where=text("status = 'Pending'"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<AccessRequest(id={self.id}, user_id={self.user_id}, "
            f"software_id={self.software_id}, access_type={self.access_type.value}, "
            f"status={self.status.value})>"
        )


__all__ = ["AccessRequest", "RequestStatus"]
