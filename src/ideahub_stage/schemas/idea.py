"""Idea-related Pydantic schemas."""

from typing import Any

from pydantic import Field

from ideahub_stage.models import VoteType

from .common import APIModel, UTCDateTime


class IdeaCreate(APIModel):
    """Schema for posting a new idea."""

    title: str = Field(..., description="Idea title; trimmed, 3-200 characters")
    description: Any = Field(..., description="Rich-text editor document (JSON or JSON string)")
    uploaded_images: list[str] = Field(
        default_factory=list,
        description="URLs of images already placed in object storage",
    )


class IdeaAuthor(APIModel):
    """Public author details embedded in idea payloads."""

    id: str
    username: str
    name: str | None = None
    image: str | None = None


class IdeaOut(APIModel):
    """Idea as returned by the API."""

    id: int
    title: str
    description: Any
    uploaded_images: list[str]
    author_id: str
    votes_count: int
    created_at: UTCDateTime
    updated_at: UTCDateTime
    author: IdeaAuthor
    comment_count: int = 0
    user_vote: VoteType | None = None


class IdeaListResponse(APIModel):
    """A page of the idea feed."""

    ideas: list[IdeaOut]
    next_cursor: str | None
    has_more: bool
