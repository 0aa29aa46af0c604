"""Application error taxonomy and response helpers."""

from typing import Any, Dict

from fastapi import status


class AppError(Exception):
    """Base application error.

    ``context`` carries structured details a client can act on, e.g. the
    conflicting request's id and status.
    """

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = status.HTTP_400_BAD_REQUEST,
        context: Dict[str, Any] | None = None,
    ):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        self.context = context or {}
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input."""

    def __init__(self, message: str = "Invalid input", context: Dict[str, Any] | None = None):
        super().__init__(message, "validation_error", status.HTTP_400_BAD_REQUEST, context)


class NotFoundError(AppError):
    """Referenced software, request or user does not exist."""

    def __init__(self, message: str = "Not found", context: Dict[str, Any] | None = None):
        super().__init__(message, "not_found", status.HTTP_404_NOT_FOUND, context)


class ConflictError(AppError):
    """Operation would violate a uniqueness or admissibility rule."""

    def __init__(self, message: str = "Conflict", context: Dict[str, Any] | None = None):
        super().__init__(message, "conflict", status.HTTP_409_CONFLICT, context)


class AuthorizationError(AppError):
    """Actor lacks the role required for the operation."""

    def __init__(self, message: str = "Access denied", context: Dict[str, Any] | None = None):
        super().__init__(message, "forbidden", status.HTTP_403_FORBIDDEN, context)


class AuthenticationError(AppError):
    """Caller identity is missing or could not be verified."""

    def __init__(
        self,
        message: str = "Not authenticated",
        code: str = "not_authenticated",
        http_status: int = status.HTTP_401_UNAUTHORIZED,
    ):
        super().__init__(message, code, http_status)


def _camelize(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _render(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camelize(k): _render(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_render(v) for v in value]
    # str enums render as their label
    if isinstance(value, str):
        return str(value.value) if hasattr(value, "value") else value
    return value


def error_response(error: AppError) -> Dict[str, Any]:
    """Create a standardized error response body."""
    body: Dict[str, Any] = {
        "success": False,
        "code": error.code,
        "message": error.message,
    }
    body.update(_render(error.context))
    return body


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthorizationError",
    "AuthenticationError",
    "error_response",
]
