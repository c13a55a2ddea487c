# src/ideahub_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .ideas import router as ideas_router
from .me import router as me_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "comments_router",
    "ideas_router",
    "me_router",
    "users_router",
    "votes_router",
]
