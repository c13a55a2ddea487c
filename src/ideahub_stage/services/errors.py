"""Error taxonomy shared by the service layer.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request; ``ideahub_stage.main`` maps them onto HTTP responses.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for failures surfaced to API callers."""

    code = "Internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class UnauthenticatedError(ServiceError):
    """No identity, or the presented credentials could not be verified."""

    code = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """Authenticated caller does not own the resource."""

    code = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """Target entity does not exist."""

    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(ServiceError):
    """Input failed validation (length, type, mismatched relationship)."""

    code = "InvalidArgument"
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """A state precondition does not hold, e.g. deleting twice."""

    code = "Conflict"
    status_code = status.HTTP_409_CONFLICT


class InternalError(ServiceError):
    """Unexpected store or transaction failure."""
