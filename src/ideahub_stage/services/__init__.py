# src/ideahub_stage/services/__init__.py
"""Business logic services for the IdeaHub application."""

from .errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    ServiceError,
    UnauthenticatedError,
)
from .votes import COMMENT_LEDGER, IDEA_LEDGER, apply_vote, reconcile_vote_counts

__all__ = [
    "ServiceError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "InvalidArgumentError",
    "ConflictError",
    "InternalError",
    "COMMENT_LEDGER",
    "IDEA_LEDGER",
    "apply_vote",
    "reconcile_vote_counts",
]
