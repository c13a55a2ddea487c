"""Profile summaries and per-user activity listings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from ideahub_stage.core.settings import settings
from ideahub_stage.models import Comment, Idea, IdeaVote, User, VoteType
from ideahub_stage.services.errors import ForbiddenError, NotFoundError, UnauthenticatedError
from ideahub_stage.services.pagination import Ordering, Page, SortKey, clamp_limit, paginate

SortBy = Literal["latest", "top"]

_IDEA_ORDERS: dict[str, tuple[SortKey, ...]] = {
    "latest": (
        SortKey("created_at", Idea.created_at, is_datetime=True),
        SortKey("id", Idea.id),
    ),
    "top": (
        SortKey("votes_count", Idea.votes_count),
        SortKey("created_at", Idea.created_at, is_datetime=True),
        SortKey("id", Idea.id),
    ),
}

_COMMENT_ORDERS: dict[str, tuple[SortKey, ...]] = {
    "latest": (
        SortKey("created_at", Comment.created_at, is_datetime=True),
        SortKey("id", Comment.id),
    ),
    "top": (
        SortKey("votes_count", Comment.votes_count),
        SortKey("created_at", Comment.created_at, is_datetime=True),
        SortKey("id", Comment.id),
    ),
}

_UPVOTE_ORDERS: dict[str, tuple[SortKey, ...]] = {
    "latest": (
        SortKey("created_at", IdeaVote.created_at, is_datetime=True),
        SortKey("idea_id", IdeaVote.idea_id),
    ),
    "top": (
        SortKey("votes_count", Idea.votes_count, getter=lambda vote: vote.idea.votes_count),
        SortKey("created_at", IdeaVote.created_at, is_datetime=True),
        SortKey("idea_id", IdeaVote.idea_id),
    ),
}


@dataclass(frozen=True)
class ProfileSummary:
    """Aggregated counters shown on a profile page."""

    user: User
    ideas_count: int
    comments_count: int
    upvotes_received: int
    downvotes_received: int


def _find_user(db: Session, username: str) -> User | None:
    return db.scalars(select(User).where(User.username == username)).first()


def _page_size(limit: int | None) -> int:
    return clamp_limit(
        limit,
        default=settings.profile_page_default,
        maximum=settings.profile_page_max,
    )


def get_profile(db: Session, username: str) -> ProfileSummary:
    """Return the profile summary for ``username``."""
    user = _find_user(db, username)
    if user is None:
        raise NotFoundError("User not found")

    ideas_count = db.scalar(
        select(func.count(Idea.id)).where(Idea.author_user_id == user.id)
    ) or 0
    comments_count = db.scalar(
        select(func.count(Comment.id)).where(
            Comment.author_user_id == user.id,
            Comment.is_deleted.is_(False),
        )
    ) or 0

    received = dict(
        db.execute(
            select(IdeaVote.type, func.count())
            .join(Idea, Idea.id == IdeaVote.idea_id)
            .where(Idea.author_user_id == user.id)
            .group_by(IdeaVote.type)
        ).all()
    )
    return ProfileSummary(
        user=user,
        ideas_count=ideas_count,
        comments_count=comments_count,
        upvotes_received=received.get(VoteType.UP.value, 0),
        downvotes_received=received.get(VoteType.DOWN.value, 0),
    )


def list_user_ideas(
    db: Session,
    *,
    username: str,
    sort_by: SortBy = "latest",
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[Idea]:
    """Return a page of ideas posted by ``username``; empty if the user is unknown."""
    user = _find_user(db, username)
    if user is None:
        return Page()

    ordering = Ordering(scope=f"user-ideas:{user.id}:{sort_by}", keys=_IDEA_ORDERS[sort_by])
    stmt = select(Idea).where(Idea.author_user_id == user.id)
    return paginate(db, stmt, ordering, cursor=cursor, limit=_page_size(limit))


def list_user_comments(
    db: Session,
    *,
    username: str,
    sort_by: SortBy = "latest",
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[Comment]:
    """Return a page of ``username``'s live comments; empty if the user is unknown."""
    user = _find_user(db, username)
    if user is None:
        return Page()

    ordering = Ordering(scope=f"user-comments:{user.id}:{sort_by}", keys=_COMMENT_ORDERS[sort_by])
    stmt = (
        select(Comment)
        .where(Comment.author_user_id == user.id, Comment.is_deleted.is_(False))
        .options(selectinload(Comment.idea))
    )
    return paginate(db, stmt, ordering, cursor=cursor, limit=_page_size(limit))


def list_user_upvotes(
    db: Session,
    *,
    viewer_id: str | None,
    username: str,
    sort_by: SortBy = "latest",
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[IdeaVote]:
    """Return a page of ideas the profile owner upvoted.

    Only the owner may see this list.

    Raises:
        UnauthenticatedError: If the caller is anonymous.
        NotFoundError: If ``username`` does not exist.
        ForbiddenError: If the caller is not the profile owner.
    """
    if viewer_id is None:
        raise UnauthenticatedError("You must be logged in to view upvotes")
    user = _find_user(db, username)
    if user is None:
        raise NotFoundError("User not found")
    if user.id != viewer_id:
        raise ForbiddenError("You can only view your own upvotes")

    ordering = Ordering(scope=f"user-upvotes:{user.id}:{sort_by}", keys=_UPVOTE_ORDERS[sort_by])
    stmt = (
        select(IdeaVote)
        .join(Idea, Idea.id == IdeaVote.idea_id)
        .where(IdeaVote.voter_user_id == user.id, IdeaVote.type == VoteType.UP.value)
        .options(selectinload(IdeaVote.idea))
    )
    return paginate(db, stmt, ordering, cursor=cursor, limit=_page_size(limit))
