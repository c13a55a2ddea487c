# src/ideahub_stage/models/comment.py
"""SQLAlchemy model for comments and nested replies."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideahub_stage.db.session import Base
from ideahub_stage.db.time import utcnow

from .idea import Idea
from .user import User

DELETED_PLACEHOLDER = "[deleted]"


class Comment(Base):
    """Node of a per-idea comment forest.

    Top-level comments have ``parent_comment_id = NULL``. A reply always shares
    its parent's ``idea_id`` and its parent link is never reassigned, so the
    forest cannot contain cycles. Comments are tombstoned, never removed.
    """

    __tablename__ = "comment"
    __table_args__ = (
        Index(
            "ix_comment_listing",
            "idea_id",
            "parent_comment_id",
            "votes_count",
            "created_at",
        ),
        Index("ix_comment_parent_comment_id", "parent_comment_id"),
        Index("ix_comment_author_user_id", "author_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    idea_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("idea.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id"),
        nullable=True,
    )
    author_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    votes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="selectin")
    idea: Mapped[Idea] = relationship("Idea")
