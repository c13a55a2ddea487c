# src/ideahub_stage/models/idea.py
"""SQLAlchemy model for ideas, the top-level entries of the feed."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideahub_stage.db.session import Base
from ideahub_stage.db.time import utcnow

from .user import User


class Idea(Base):
    """An idea posted to the feed.

    ``votes_count`` is a denormalized running total of the idea's vote ledger.
    It is only ever changed by database-side increments on the vote path.
    """

    __tablename__ = "idea"
    __table_args__ = (
        Index("ix_idea_created_at_id", "created_at", "id"),
        Index("ix_idea_author_user_id", "author_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # Rich-text editor document, stored as-is.
    description: Mapped[Any] = mapped_column(JSON, nullable=False)
    uploaded_images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    author_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    votes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
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
