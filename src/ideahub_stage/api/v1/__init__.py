# src/ideahub_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    comments_router,
    ideas_router,
    me_router,
    users_router,
    votes_router,
)

__all__ = [
    "comments_router",
    "ideas_router",
    "me_router",
    "users_router",
    "votes_router",
]
