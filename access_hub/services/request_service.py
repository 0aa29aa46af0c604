"""Request service: admission of new access requests and request queries."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from access_hub.errors import ConflictError, NotFoundError, ValidationError
from access_hub.models import AccessLevel, AccessRequest, RequestStatus
from access_hub.services.access_hierarchy import covers
from access_hub.services.audit_service import AuditService
from access_hub.services.software_service import SoftwareService

logger = logging.getLogger(__name__)


def parse_access_type(value: Any) -> AccessLevel:
    """Parse a tier label into an AccessLevel.

    Raises:
        ValidationError: Missing or unknown label
    """
    if not value:
        raise ValidationError("Access type is required")
    try:
        return AccessLevel(value)
    except ValueError:
        raise ValidationError("Invalid access type. Must be Read, Write, or Admin") from None


def pending_conflict(pending: AccessRequest) -> ConflictError:
    """Conflict naming the Pending request that blocks the operation."""
    return ConflictError(
        "You already have a pending request for this software. "
        "Please wait for it to be processed.",
        context={
            "existing_request": {
                "id": pending.id,
                "status": pending.status,
                "access_type": pending.access_type,
                "reason": pending.reason,
            }
        },
    )


class RequestService:
    """Service for creating and querying access requests."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def create_request(
        self,
        requester_id: str,
        software_id: str | None,
        access_type: AccessLevel | str | None,
        reason: str | None,
    ) -> AccessRequest:
        """Create a new Pending request if the requester may have one.

        Checks run in order and the first failure wins:
        input shape, software existence, an Approved request whose tier
        already covers the requested one, an in-flight Pending request.

        Args:
            requester_id: ID of the requesting user
            software_id: Target software ID
            access_type: Requested tier label (Read/Write/Admin)
            reason: Justification, stored trimmed

        Returns:
            Created AccessRequest with status=Pending

        Raises:
            ValidationError: Missing software id, blank reason, bad tier
            NotFoundError: Software does not exist
            ConflictError: Access already sufficient, or a request is pending
        """
        if not software_id:
            raise ValidationError("Software ID is required")
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError("Reason is required")
        requested = parse_access_type(access_type)
        reason = reason.strip()
        software_id = str(software_id)

        software = await SoftwareService(self.db).get_software(software_id)
        if not software:
            raise NotFoundError("Software not found")

        approved = await self.get_latest_approved_request(requester_id, software_id)
        if approved and covers(approved.access_type, requested):
            logger.info(
                "Request by %s for %s rejected: holds %s, asked %s",
                requester_id,
                software_id,
                approved.access_type.value,
                requested.value,
            )
            raise ConflictError(
                f"You already have {approved.access_type.value} access to this software, "
                f"which includes {requested.value} permissions",
                context={
                    "current_access": {
                        "access_type": approved.access_type,
                        "status": approved.status,
                    }
                },
            )

        pending = await self.get_pending_request(requester_id, software_id)
        if pending:
            logger.info(
                "Request by %s for %s rejected: request %s still pending",
                requester_id,
                software_id,
                pending.id,
            )
            raise pending_conflict(pending)

        new_request = AccessRequest(
            user_id=requester_id,
            software_id=software_id,
            access_type=requested,
            reason=reason,
            status=RequestStatus.PENDING,
        )
        self.db.add(new_request)

        try:
            await self.db.flush()
            AuditService.log(
                self.db,
                "access_request",
                new_request.id,
                "create",
                actor_id=requester_id,
                changes={"access_type": requested.value, "status": RequestStatus.PENDING.value},
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            # Lost a race against a concurrent admission for the same pair
            pending = await self.get_pending_request(requester_id, software_id)
            if pending is None:
                logger.error("Integrity error creating request: %s", e, exc_info=True)
                raise
            logger.warning(
                "Concurrent request by %s for %s collided with pending request %s",
                requester_id,
                software_id,
                pending.id,
            )
            raise pending_conflict(pending) from e

        logger.info(
            "Request %s created: user=%s software=%s access_type=%s",
            new_request.id,
            requester_id,
            software_id,
            requested.value,
        )
        return new_request

    async def get_pending_request(self, requester_id: str, software_id: str) -> AccessRequest | None:
        """Get the Pending request of a user for a software, if any."""
        result = await self.db.execute(
            select(AccessRequest)
            .where(
                AccessRequest.user_id == requester_id,
                AccessRequest.software_id == software_id,
                AccessRequest.status == RequestStatus.PENDING,
            )
            .order_by(AccessRequest.created_at)
        )
        return result.scalars().first()

    async def get_latest_approved_request(
        self, requester_id: str, software_id: str
    ) -> AccessRequest | None:
        """Get the most recently created Approved request of a user for a software."""
        result = await self.db.execute(
            select(AccessRequest)
            .where(
                AccessRequest.user_id == requester_id,
                AccessRequest.software_id == software_id,
                AccessRequest.status == RequestStatus.APPROVED,
            )
            .order_by(AccessRequest.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def get_request_by_id(
        self, request_id: str, with_relations: bool = False
    ) -> AccessRequest | None:
        """Get request by ID.

        Args:
            request_id: Request ID
            with_relations: Also load the requester and software

        Returns:
            AccessRequest or None if not found
        """
        stmt = select(AccessRequest).where(AccessRequest.id == request_id)
        if with_relations:
            stmt = stmt.options(
                selectinload(AccessRequest.user), selectinload(AccessRequest.software)
            ).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_requests_for_user(self, requester_id: str) -> list[AccessRequest]:
        """List all requests of a user, with software (and requester) loaded."""
        result = await self.db.execute(
            select(AccessRequest)
            .where(AccessRequest.user_id == requester_id)
            .options(selectinload(AccessRequest.software), selectinload(AccessRequest.user))
            .order_by(AccessRequest.created_at, AccessRequest.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_all_requests(self) -> list[AccessRequest]:
        """List every request, with software and requester loaded."""
        result = await self.db.execute(
            select(AccessRequest)
            .options(selectinload(AccessRequest.software), selectinload(AccessRequest.user))
            .order_by(AccessRequest.created_at, AccessRequest.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())


__all__ = ["RequestService", "parse_access_type", "pending_conflict"]
