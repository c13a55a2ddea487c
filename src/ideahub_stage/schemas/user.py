"""User and profile Pydantic schemas."""

from ideahub_stage.models import VoteType

from .common import APIModel, UTCDateTime
from .idea import IdeaOut


class AccountOut(APIModel):
    """The caller's own account."""

    id: str
    email: str
    username: str
    name: str | None = None
    image: str | None = None
    bio: str | None = None


class ProfileOut(APIModel):
    """Public profile summary."""

    id: str
    username: str
    name: str | None = None
    image: str | None = None
    bio: str | None = None
    created_at: UTCDateTime
    ideas_count: int
    comments_count: int
    upvotes_received: int
    downvotes_received: int


class ProfileIdeaRef(APIModel):
    """Minimal idea reference attached to profile comments."""

    id: int
    title: str


class ProfileComment(APIModel):
    """A comment shown on its author's profile."""

    id: int
    content: str
    votes_count: int
    created_at: UTCDateTime
    parent_id: int | None
    idea: ProfileIdeaRef
    user_vote: VoteType | None = None


class ProfileIdeasResponse(APIModel):
    ideas: list[IdeaOut]
    next_cursor: str | None
    has_more: bool


class ProfileCommentsResponse(APIModel):
    comments: list[ProfileComment]
    next_cursor: str | None
    has_more: bool


class ProfileUpvote(APIModel):
    """An idea the profile owner upvoted."""

    voted_at: UTCDateTime
    idea: IdeaOut


class ProfileUpvotesResponse(APIModel):
    votes: list[ProfileUpvote]
    next_cursor: str | None
    has_more: bool
