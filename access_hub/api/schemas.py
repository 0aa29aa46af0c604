"""Pydantic schemas for the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from access_hub.models import AccessLevel, RequestStatus, UserRole


class ApiModel(BaseModel):
    """Base schema: camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Payloads. Fields are optional so the services report missing values;
# wrongly typed values are reported by request_validation_handler.


class SoftwareCreatePayload(ApiModel):
    """Payload for POST /api/software/create-software."""

    name: str | None = Field(None, description="Unique software name")
    description: str | None = Field(None, description="Free-text description")
    access_levels: Any = Field(None, description="Grantable tiers, default Write/Read/Admin")


class AccessRequestPayload(ApiModel):
    """Payload for POST /api/software/requests."""

    software_id: str | None = Field(None, description="Target software ID")
    reason: str | None = Field(None, description="Why access is needed")
    access_type: str | None = Field(None, description="Read, Write or Admin")


class StatusUpdatePayload(ApiModel):
    """Payload for PATCH /api/software/requests/{id}."""

    status: str | None = Field(None, description="Pending, Approved or Rejected")


class CredentialsPayload(ApiModel):
    """Payload for signup and login."""

    username: str | None = None
    password: str | None = None


class RoleUpdatePayload(ApiModel):
    """Payload for PATCH /api/auth/update-role/{id}."""

    role: str | None = Field(None, description="Employee, Manager or Admin")


# Resources


class UserPublic(ApiModel):
    """User without credentials."""

    id: str
    username: str
    role: UserRole


class SoftwareResponse(ApiModel):
    """Registered software."""

    id: str
    name: str
    description: str
    access_levels: list[str]


class AccessRequestResponse(ApiModel):
    """Access request as created."""

    id: str
    user_id: str
    software_id: str
    access_type: AccessLevel
    reason: str
    status: RequestStatus


class AccessRequestDetail(AccessRequestResponse):
    """Access request with its software and, where loaded, requester."""

    software: SoftwareResponse | None = None
    user: UserPublic | None = None


# Envelopes


class SoftwareCreatedResponse(ApiModel):
    success: bool = True
    message: str
    data: SoftwareResponse


class SoftwareListResponse(ApiModel):
    softwares: list[SoftwareResponse]


class AccessRequestCreatedResponse(ApiModel):
    success: bool = True
    message: str
    request: AccessRequestResponse


class AccessRequestListResponse(ApiModel):
    requests: list[AccessRequestDetail]


class AccessRequestUpdatedResponse(ApiModel):
    success: bool = True
    message: str
    data: AccessRequestDetail


class AuthResponse(ApiModel):
    """Tokens issued on signup, login and refresh."""

    message: str | None = None
    access_token: str
    refresh_token: str
    user: UserPublic


class UserResponse(ApiModel):
    success: bool = True
    message: str
    user: UserPublic


class RoleUpdateData(ApiModel):
    user: UserPublic


class RoleUpdatedResponse(ApiModel):
    success: bool = True
    message: str
    data: RoleUpdateData
