"""Software registry service: creation rules and listing."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.errors import ConflictError, ValidationError
from access_hub.models.software import DEFAULT_ACCESS_LEVELS, Software
from access_hub.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class SoftwareService:
    """Service for registering and listing software."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def create_software(
        self,
        name: str | None,
        description: str | None = None,
        access_levels: Any = None,
        actor_id: str | None = None,
    ) -> Software:
        """Register a new software entry.

        Args:
            name: Unique display name (case-sensitive)
            description: Free text, empty string when omitted
            access_levels: Grantable tiers; defaults to Write, Read, Admin
            actor_id: User performing the registration, for the audit log

        Returns:
            The created Software

        Raises:
            ValidationError: Blank name, or access_levels is not a list of strings
            ConflictError: A software with this name already exists
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Software name is required")

        if access_levels is not None:
            if not isinstance(access_levels, (list, tuple)) or not all(
                isinstance(level, str) for level in access_levels
            ):
                raise ValidationError("Access levels must be an array")

        existing = await self.get_by_name(name)
        if existing:
            logger.warning("Software %r already registered as %s", name, existing.id)
            raise ConflictError("Software with this name already exists")

        software = Software(
            name=name,
            description=description or "",
            access_levels=(
                list(access_levels) if access_levels is not None else list(DEFAULT_ACCESS_LEVELS)
            ),
        )
        self.db.add(software)

        try:
            await self.db.flush()
            AuditService.log(self.db, "software", software.id, "create", actor_id=actor_id)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("Concurrent registration of software %r: %s", name, e)
            raise ConflictError("Software with this name already exists") from e

        logger.info("Registered software %s (%s)", software.name, software.id)
        return software

    async def get_by_name(self, name: str) -> Software | None:
        """Get software by exact name."""
        result = await self.db.execute(select(Software).where(Software.name == name))
        return result.scalar_one_or_none()

    async def get_software(self, software_id: str) -> Software | None:
        """Get software by ID.

        Args:
            software_id: Software ID

        Returns:
            Software or None if not found
        """
        result = await self.db.execute(select(Software).where(Software.id == software_id))
        return result.scalar_one_or_none()

    async def list_software(self) -> list[Software]:
        """List all registered software in creation order."""
        result = await self.db.execute(
            select(Software).order_by(Software.created_at, Software.id)
        )
        return list(result.scalars().all())


__all__ = ["SoftwareService"]
