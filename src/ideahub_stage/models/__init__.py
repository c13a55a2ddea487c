"""SQLAlchemy models for the IdeaHub application."""

from .comment import DELETED_PLACEHOLDER, Comment
from .idea import Idea
from .user import User
from .vote import CommentVote, IdeaVote, VoteType

__all__ = [
    "Comment", "DELETED_PLACEHOLDER",
    "Idea",
    "User",
    "CommentVote", "IdeaVote", "VoteType",
]
