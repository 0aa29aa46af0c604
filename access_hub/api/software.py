"""Software catalogue and access request API routes."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from access_hub.api.schemas import (
    AccessRequestCreatedResponse,
    AccessRequestDetail,
    AccessRequestListResponse,
    AccessRequestPayload,
    AccessRequestResponse,
    AccessRequestUpdatedResponse,
    SoftwareCreatedResponse,
    SoftwareCreatePayload,
    SoftwareListResponse,
    SoftwareResponse,
    StatusUpdatePayload,
)
from access_hub.services import get_async_session
from access_hub.services.approval_service import ApprovalService
from access_hub.services.auth_service import Identity, get_current_identity
from access_hub.services.request_service import RequestService
from access_hub.services.software_service import SoftwareService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/software", tags=["software"])


@router.post(
    "/create-software",
    response_model=SoftwareCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_software(
    payload: SoftwareCreatePayload, session: AsyncSession = Depends(get_async_session)
) -> SoftwareCreatedResponse:
    """
    Register a new software entry.

    Returns:
        201: Created software
        400: Missing name or malformed access levels
        409: Name already registered
    """
    software = await SoftwareService(session).create_software(
        name=payload.name,
        description=payload.description,
        access_levels=payload.access_levels,
    )
    return SoftwareCreatedResponse(
        message="Software created successfully",
        data=SoftwareResponse.model_validate(software),
    )


@router.get("/get-softwares", response_model=SoftwareListResponse)
async def list_software(session: AsyncSession = Depends(get_async_session)) -> SoftwareListResponse:
    """List all registered software."""
    softwares = await SoftwareService(session).list_software()
    return SoftwareListResponse(
        softwares=[SoftwareResponse.model_validate(s) for s in softwares]
    )


@router.post(
    "/requests",
    response_model=AccessRequestCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_access_request(
    payload: AccessRequestPayload,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_async_session),
) -> AccessRequestCreatedResponse:
    """
    Submit an access request on behalf of the authenticated user.

    Returns:
        201: Created request (Pending)
        400: Missing/invalid software id, reason or access type
        401/403: Missing, expired or invalid access token
        404: Software not found
        409: Access already sufficient or a request is already pending
    """
    access_request = await RequestService(session).create_request(
        requester_id=identity.id,
        software_id=payload.software_id,
        access_type=payload.access_type,
        reason=payload.reason,
    )
    return AccessRequestCreatedResponse(
        message="Request submitted successfully",
        request=AccessRequestResponse.model_validate(access_request),
    )


@router.get("/get-requests/{user_id}", response_model=AccessRequestListResponse)
async def list_user_requests(
    user_id: str, session: AsyncSession = Depends(get_async_session)
) -> AccessRequestListResponse:
    """List one user's requests with their software."""
    requests = await RequestService(session).list_requests_for_user(user_id)
    logger.debug("Listed %d requests for user %s", len(requests), user_id)
    return AccessRequestListResponse(
        requests=[AccessRequestDetail.model_validate(r) for r in requests]
    )


@router.get("/get-requests", response_model=AccessRequestListResponse)
async def list_all_requests(
    session: AsyncSession = Depends(get_async_session),
) -> AccessRequestListResponse:
    """List every request with software and requester."""
    requests = await RequestService(session).list_all_requests()
    return AccessRequestListResponse(
        requests=[AccessRequestDetail.model_validate(r) for r in requests]
    )


@router.patch("/requests/{request_id}", response_model=AccessRequestUpdatedResponse)
async def update_request_status(
    request_id: str,
    payload: StatusUpdatePayload,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_async_session),
) -> AccessRequestUpdatedResponse:
    """
    Approve, reject or reset a request (Manager only).

    Returns:
        200: Updated request with requester and software
        400: Invalid status
        403: Caller is not a Manager
        404: Request not found
    """
    updated = await ApprovalService(session).update_request_status(
        actor_role=identity.role,
        request_id=request_id,
        new_status=payload.status,
        actor_id=identity.id,
    )
    return AccessRequestUpdatedResponse(
        message="Request status updated successfully",
        data=AccessRequestDetail.model_validate(updated),
    )
