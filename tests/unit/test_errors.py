"""Tests for the error taxonomy and response bodies."""

from access_hub.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    error_response,
)
from access_hub.models import AccessLevel, RequestStatus


def test_status_codes():
    assert ValidationError().http_status == 400
    assert AuthenticationError().http_status == 401
    assert AuthorizationError().http_status == 403
    assert NotFoundError().http_status == 404
    assert ConflictError().http_status == 409


def test_error_response_camelizes_context():
    error = ConflictError(
        "You already have Write access to this software, which includes Read permissions",
        context={
            "current_access": {"access_type": AccessLevel.WRITE, "status": RequestStatus.APPROVED}
        },
    )

    assert error_response(error) == {
        "success": False,
        "code": "conflict",
        "message": "You already have Write access to this software, which includes Read permissions",
        "currentAccess": {"accessType": "Write", "status": "Approved"},
    }


def test_error_response_without_context():
    body = error_response(NotFoundError("Request not found"))
    assert body == {"success": False, "code": "not_found", "message": "Request not found"}


def test_authentication_error_custom_code():
    error = AuthenticationError("Invalid access token", code="TOKEN_INVALID", http_status=403)
    assert error_response(error)["code"] == "TOKEN_INVALID"
    assert error.http_status == 403
