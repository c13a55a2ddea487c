"""Comment-related Pydantic schemas."""

from pydantic import Field

from ideahub_stage.models import VoteType

from .common import APIModel, EntityId, UTCDateTime


class CommentCreate(APIModel):
    """Schema for posting a comment or a reply."""

    content: str = Field(..., description="Comment text; trimmed, 1-2000 characters")
    idea_id: EntityId = Field(..., description="Idea the comment belongs to")
    parent_id: EntityId | None = Field(
        None,
        alias="commentId",
        description="Parent comment ID when replying",
    )


class CommentEdit(APIModel):
    """Schema for replacing a comment's text."""

    content: str = Field(..., description="New comment text")


class CommentAuthor(APIModel):
    """Public author details embedded in comment payloads."""

    id: str
    username: str
    image: str | None = None


class CommentOut(APIModel):
    """Comment as returned by the API."""

    id: int
    content: str
    author_id: str
    idea_id: int
    parent_id: int | None
    votes_count: int
    is_deleted: bool
    created_at: UTCDateTime
    updated_at: UTCDateTime
    author: CommentAuthor
    reply_count: int = 0
    user_vote: VoteType | None = Field(None, description="The caller's own vote")


class CommentCreateResponse(APIModel):
    """Response returned after creating a comment."""

    comment: CommentOut
    message: str


class CommentEditResponse(APIModel):
    """Response returned after editing a comment."""

    success: bool = True
    comment: CommentOut
    message: str


class CommentListResponse(APIModel):
    """A page of top-level comments."""

    comments: list[CommentOut]
    next_cursor: str | None
    has_more: bool


class ReplyListResponse(APIModel):
    """A page of replies to one comment."""

    replies: list[CommentOut]
    has_more: bool
    next_cursor: str | None
