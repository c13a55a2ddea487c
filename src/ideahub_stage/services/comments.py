"""Comment creation, editing, soft deletion and listing."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import exists, func, or_, select
from sqlalchemy.orm import Session, aliased

from ideahub_stage.core.settings import settings
from ideahub_stage.models import DELETED_PLACEHOLDER, Comment, Idea, VoteType
from ideahub_stage.schemas.comment import CommentAuthor, CommentOut
from ideahub_stage.services.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from ideahub_stage.services.pagination import (
    Ordering,
    Page,
    SortKey,
    clamp_limit,
    paginate,
)
from ideahub_stage.services.transaction import commit_or_raise

logger = logging.getLogger(__name__)

# Popular first, then newest.
TOP_LEVEL_ORDER = Ordering(
    scope="comments",
    keys=(
        SortKey("votes_count", Comment.votes_count),
        SortKey("created_at", Comment.created_at, is_datetime=True),
        SortKey("id", Comment.id),
    ),
)

# Popular first, then oldest so threads read in conversational order.
REPLY_ORDER = Ordering(
    scope="replies",
    keys=(
        SortKey("votes_count", Comment.votes_count),
        SortKey("created_at", Comment.created_at, descending=False, is_datetime=True),
        SortKey("id", Comment.id, descending=False),
    ),
)


def normalize_content(content: str) -> str:
    """Trim comment text and enforce the length bounds."""
    text = content.strip()
    if not text:
        raise InvalidArgumentError("Comment cannot be empty")
    if len(text) > settings.comment_max_length:
        raise InvalidArgumentError(
            f"Comment cannot exceed {settings.comment_max_length} characters"
        )
    return text


def visible_in_listing() -> object:
    """Predicate for comments that may appear in a thread listing.

    A live comment is always listed. A deleted one is listed as a placeholder
    only while it has at least one direct reply, deleted or not. The check is a
    single hop, not a scan of the whole subtree.
    """
    child = aliased(Comment)
    has_replies = exists().where(child.parent_comment_id == Comment.id)
    return or_(Comment.is_deleted.is_(False), has_replies)


def _lock_comment(db: Session, comment_id: int) -> Comment:
    comment = db.scalars(
        select(Comment)
        .where(Comment.id == comment_id)
        .with_for_update(of=Comment)
        .execution_options(populate_existing=True)
    ).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def create_comment(
    db: Session,
    *,
    author_id: str,
    idea_id: int,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    """Create a top-level comment or, when ``parent_id`` is given, a reply.

    Raises:
        InvalidArgumentError: If the content is empty or too long, or the
            parent belongs to a different idea.
        NotFoundError: If the idea or the parent comment does not exist.
    """
    text = normalize_content(content)

    if db.get(Idea, idea_id) is None:
        raise NotFoundError("Idea not found")

    if parent_id is not None:
        parent = db.get(Comment, parent_id)
        if parent is None:
            raise NotFoundError("Parent comment not found")
        if parent.idea_id != idea_id:
            raise InvalidArgumentError("Parent comment does not belong to this idea")

    comment = Comment(
        idea_id=idea_id,
        parent_comment_id=parent_id,
        author_user_id=author_id,
        content=text,
        votes_count=0,
        is_deleted=False,
    )
    db.add(comment)
    commit_or_raise(db, "Failed to create comment")
    db.refresh(comment)

    logger.info(
        "Comment %s created on idea %s by %s (parent=%s)",
        comment.id,
        idea_id,
        author_id,
        parent_id,
    )
    return comment


def edit_comment(db: Session, *, author_id: str, comment_id: int, content: str) -> Comment:
    """Replace the text of the caller's own live comment.

    Ownership and deletion state are checked on the locked row inside the
    transaction that performs the write.
    """
    text = normalize_content(content)

    comment = _lock_comment(db, comment_id)
    if comment.author_user_id != author_id:
        raise ForbiddenError("You can only edit your own comments")
    if comment.is_deleted:
        raise InvalidArgumentError("Cannot edit deleted comments")

    comment.content = text
    commit_or_raise(db, "Failed to edit comment")
    db.refresh(comment)
    return comment


def soft_delete_comment(db: Session, *, author_id: str, comment_id: int) -> Comment:
    """Tombstone the caller's comment; replies stay attached to it.

    The vote total is left untouched and the deletion cannot be undone.
    """
    comment = _lock_comment(db, comment_id)
    if comment.author_user_id != author_id:
        raise ForbiddenError("You can only delete your own comments")
    if comment.is_deleted:
        raise ConflictError("Comment already deleted")

    comment.is_deleted = True
    comment.content = DELETED_PLACEHOLDER
    commit_or_raise(db, "Failed to delete comment")

    logger.info("Comment %s soft-deleted by %s", comment_id, author_id)
    return comment


def list_comments(
    db: Session,
    *,
    idea_id: int,
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[Comment]:
    """Return one page of an idea's top-level comments."""
    if db.get(Idea, idea_id) is None:
        raise NotFoundError("Idea not found")

    stmt = select(Comment).where(
        Comment.idea_id == idea_id,
        Comment.parent_comment_id.is_(None),
        visible_in_listing(),
    )
    page_size = clamp_limit(
        limit,
        default=settings.comments_page_default,
        maximum=settings.comments_page_max,
    )
    ordering = TOP_LEVEL_ORDER.for_scope(f"comments:{idea_id}")
    return paginate(db, stmt, ordering, cursor=cursor, limit=page_size)


def list_replies(
    db: Session,
    *,
    comment_id: int,
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[Comment]:
    """Return one page of direct replies to a comment."""
    if db.get(Comment, comment_id) is None:
        raise NotFoundError("Comment not found")

    stmt = select(Comment).where(
        Comment.parent_comment_id == comment_id,
        visible_in_listing(),
    )
    page_size = clamp_limit(
        limit,
        default=settings.replies_page_default,
        maximum=settings.replies_page_max,
    )
    ordering = REPLY_ORDER.for_scope(f"replies:{comment_id}")
    return paginate(db, stmt, ordering, cursor=cursor, limit=page_size)


def reply_counts(db: Session, comment_ids: Iterable[int]) -> dict[int, int]:
    """Count direct replies (including tombstones) for each comment id."""
    ids = list(comment_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Comment.parent_comment_id, func.count(Comment.id))
        .where(Comment.parent_comment_id.in_(ids))
        .group_by(Comment.parent_comment_id)
    ).all()
    return {parent_id: count for parent_id, count in rows}


def to_comment_out(
    comment: Comment,
    *,
    reply_count: int = 0,
    user_vote: VoteType | None = None,
) -> CommentOut:
    """Convert a Comment ORM instance to an API schema."""
    return CommentOut(
        id=comment.id,
        content=comment.content,
        author_id=comment.author_user_id,
        idea_id=comment.idea_id,
        parent_id=comment.parent_comment_id,
        votes_count=comment.votes_count,
        is_deleted=comment.is_deleted,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        author=CommentAuthor.model_validate(comment.author),
        reply_count=reply_count,
        user_vote=user_vote,
    )
