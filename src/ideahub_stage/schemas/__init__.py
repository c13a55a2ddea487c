"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import (
    CommentCreate,
    CommentCreateResponse,
    CommentEdit,
    CommentEditResponse,
    CommentListResponse,
    CommentOut,
    ReplyListResponse,
)
from .common import APIModel, MessageResponse
from .idea import IdeaCreate, IdeaListResponse, IdeaOut
from .user import AccountOut, ProfileOut
from .vote import CommentVoteCreate, IdeaVoteCreate, MyVoteResponse, VoteResponse

__all__ = [
    "APIModel", "MessageResponse",
    "CommentCreate", "CommentCreateResponse", "CommentEdit", "CommentEditResponse",
    "CommentListResponse", "CommentOut", "ReplyListResponse",
    "IdeaCreate", "IdeaListResponse", "IdeaOut",
    "AccountOut", "ProfileOut",
    "CommentVoteCreate", "IdeaVoteCreate", "MyVoteResponse", "VoteResponse",
]
