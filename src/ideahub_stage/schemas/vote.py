"""Vote-related Pydantic schemas."""

from pydantic import Field

from ideahub_stage.models import VoteType

from .common import APIModel, EntityId


class CommentVoteCreate(APIModel):
    """Schema for setting the caller's vote on a comment."""

    comment_id: EntityId
    # Validated by the vote service so bad values map to InvalidArgument.
    vote_type: str | None = Field(..., description='"UP", "DOWN" or null to remove the vote')


class IdeaVoteCreate(APIModel):
    """Schema for setting the caller's vote on an idea."""

    idea_id: EntityId
    vote_type: str | None = Field(..., description='"UP", "DOWN" or null to remove the vote')


class VoteResponse(APIModel):
    """Outcome of a vote request."""

    success: bool = True
    votes_count: int
    user_vote: VoteType | None
    message: str


class MyVoteResponse(APIModel):
    """The caller's current vote on a single target."""

    user_vote: VoteType | None
