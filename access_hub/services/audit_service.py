"""Audit service for logging entity lifecycle events."""

from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.models.audit_log import AuditLog


class AuditService:
    """Service for audit log operations.

    The entry is only added to the session; it is persisted by the caller's
    commit, together with the change it describes.
    """

    @staticmethod
    def log(
        db: AsyncSession,
        entity_type: str,
        entity_id: str,
        action: str,
        actor_id: str | None = None,
        changes: dict | None = None,
    ) -> AuditLog:
        """Create audit log entry (one-liner).

        Args:
            db: Database session
            entity_type: Type of entity ("software", "access_request", "user")
            entity_id: Primary key of the entity
            action: Action performed ("create", "status_change", ...)
            actor_id: User who performed the action (optional)
            changes: Optional JSON snapshot of changed fields

        Returns:
            Created AuditLog object
        """
        audit = AuditLog(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            actor_id=actor_id,
            changes=changes,
        )
        db.add(audit)
        return audit


__all__ = ["AuditService"]
