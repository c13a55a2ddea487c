# src/ideahub_stage/models/vote.py
"""Models capturing the per-voter vote ledgers for ideas and comments."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideahub_stage.db.session import Base
from ideahub_stage.db.time import utcnow

from .comment import Comment
from .idea import Idea


class VoteType(str, enum.Enum):
    """Direction of a ledger row. No row means no vote."""

    UP = "UP"
    DOWN = "DOWN"


class IdeaVote(Base):
    """Per-user vote on an idea."""

    __tablename__ = "idea_vote"
    __table_args__ = (
        CheckConstraint("type IN ('UP', 'DOWN')", name="ck_idea_vote_type"),
        Index("ix_idea_vote_idea_id", "idea_id"),
        Index("ix_idea_vote_voter_created", "voter_user_id", "created_at"),
    )

    # Composite primary key prevents duplicate votes from the same user.
    idea_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("idea.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    type: Mapped[str] = mapped_column(String(4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    idea: Mapped[Idea] = relationship("Idea")


class CommentVote(Base):
    """Per-user vote on a comment."""

    __tablename__ = "comment_vote"
    __table_args__ = (
        CheckConstraint("type IN ('UP', 'DOWN')", name="ck_comment_vote_type"),
        Index("ix_comment_vote_comment_id", "comment_id"),
    )

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    type: Mapped[str] = mapped_column(String(4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    comment: Mapped[Comment] = relationship("Comment")
