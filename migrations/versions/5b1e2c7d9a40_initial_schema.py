"""initial schema

Revision ID: 5b1e2c7d9a40
Revises:
Create Date: 2026-10-18 09:12:44.310552

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e2c7d9a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, ideas, comments and both vote ledgers."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "idea",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.JSON(), nullable=False),
        sa.Column("uploaded_images", sa.JSON(), nullable=False),
        sa.Column("author_user_id", sa.String(length=64), nullable=False),
        sa.Column("votes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_idea_created_at_id", "idea", ["created_at", "id"])
    op.create_index("ix_idea_author_user_id", "idea", ["author_user_id"])

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("idea_id", sa.Integer(), nullable=False),
        sa.Column("parent_comment_id", sa.Integer(), nullable=True),
        sa.Column("author_user_id", sa.String(length=64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("votes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["idea_id"], ["idea.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_comment_id"], ["comment.id"]),
        sa.ForeignKeyConstraint(["author_user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_comment_listing",
        "comment",
        ["idea_id", "parent_comment_id", "votes_count", "created_at"],
    )
    op.create_index("ix_comment_parent_comment_id", "comment", ["parent_comment_id"])
    op.create_index("ix_comment_author_user_id", "comment", ["author_user_id"])

    op.create_table(
        "idea_vote",
        sa.Column("idea_id", sa.Integer(), nullable=False),
        sa.Column("voter_user_id", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=4), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type IN ('UP', 'DOWN')", name="ck_idea_vote_type"),
        sa.ForeignKeyConstraint(["idea_id"], ["idea.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("idea_id", "voter_user_id"),
    )
    op.create_index("ix_idea_vote_idea_id", "idea_vote", ["idea_id"])
    op.create_index("ix_idea_vote_voter_created", "idea_vote", ["voter_user_id", "created_at"])

    op.create_table(
        "comment_vote",
        sa.Column("comment_id", sa.Integer(), nullable=False),
        sa.Column("voter_user_id", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=4), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type IN ('UP', 'DOWN')", name="ck_comment_vote_type"),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", "voter_user_id"),
    )
    op.create_index("ix_comment_vote_comment_id", "comment_vote", ["comment_id"])


def downgrade() -> None:
    """Drop every table created by :func:`upgrade`."""
    op.drop_index("ix_comment_vote_comment_id", table_name="comment_vote")
    op.drop_table("comment_vote")
    op.drop_index("ix_idea_vote_voter_created", table_name="idea_vote")
    op.drop_index("ix_idea_vote_idea_id", table_name="idea_vote")
    op.drop_table("idea_vote")
    op.drop_index("ix_comment_author_user_id", table_name="comment")
    op.drop_index("ix_comment_parent_comment_id", table_name="comment")
    op.drop_index("ix_comment_listing", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_idea_author_user_id", table_name="idea")
    op.drop_index("ix_idea_created_at_id", table_name="idea")
    op.drop_table("idea")
    op.drop_table("user_account")
