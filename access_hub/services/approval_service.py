"""Approval service: manager decisions on access requests."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from access_hub.models import AccessRequest, RequestStatus, UserRole
from access_hub.services.audit_service import AuditService
from access_hub.services.request_service import RequestService, pending_conflict

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


def parse_status(value: Any) -> RequestStatus:
    """Parse a status label into a RequestStatus.

    Raises:
        ValidationError: Missing or unknown label
    """
    try:
        return RequestStatus(value)
    except ValueError:
        raise ValidationError(
            "Valid status is required. Must be one of: Pending, Approved, Rejected"
        ) from None


class ApprovalService:
    """Service for moving access requests between statuses."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def update_request_status(
        self,
        actor_role: UserRole | str | None,
        request_id: str | None,
        new_status: RequestStatus | str | None,
        actor_id: str | None = None,
    ) -> AccessRequest:
        """Overwrite the status of a request.

        Decisions are not final: an Approved or Rejected request can be moved
        to any status again, including back to Pending.

        Args:
            actor_role: Role of the caller; must be Manager
            request_id: Request to update
            new_status: Target status label
            actor_id: Caller's user ID, for the audit log

        Returns:
            Updated request with user and software loaded

        Raises:
            AuthorizationError: Actor is not a Manager
            ValidationError: Missing request id or unknown status
            NotFoundError: Request does not exist
            ConflictError: Moving back to Pending while another request for the
                same user and software is Pending
        """
        if actor_role != UserRole.MANAGER:
            logger.warning(
                "Status change on request %s denied for role %s", request_id, actor_role
            )
            raise AuthorizationError(f"Access denied. {UserRole.MANAGER.value} role required.")

        if not request_id:
            raise ValidationError("Request ID is required")
        target = parse_status(new_status)

        requests = RequestService(self.db)
        request = await requests.get_request_by_id(request_id)
        if not request:
            logger.warning("Request %s not found for status change", request_id)
            raise NotFoundError("Request not found")

        previous = request.status
        user_id, software_id = request.user_id, request.software_id
        if previous in TERMINAL_STATUSES and previous != target:
            logger.warning(
                "Request %s reopened from %s to %s by %s",
                request_id,
                previous.value,
                target.value,
                actor_id,
            )

        try:
            request.status = target
            AuditService.log(
                self.db,
                "access_request",
                request.id,
                "status_change",
                actor_id=actor_id,
                changes={"from": previous.value, "to": target.value},
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            pending = await requests.get_pending_request(user_id, software_id)
            if pending is None:
                logger.error("Error updating request %s: %s", request_id, e, exc_info=True)
                raise
            logger.warning(
                "Request %s cannot return to Pending while %s is pending", request_id, pending.id
            )
            raise pending_conflict(pending) from e
        except Exception as e:
            logger.error("Error updating request %s: %s", request_id, e, exc_info=True)
            await self.db.rollback()
            raise

        logger.info(
            "Request %s status %s -> %s by %s", request_id, previous.value, target.value, actor_id
        )
        return await requests.get_request_by_id(request_id, with_relations=True)


__all__ = ["ApprovalService", "parse_status", "TERMINAL_STATUSES"]
