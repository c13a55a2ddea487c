"""Idea creation, lookup and the paginated feed."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ideahub_stage.core.settings import settings
from ideahub_stage.models import Comment, Idea, VoteType
from ideahub_stage.schemas.idea import IdeaAuthor, IdeaOut
from ideahub_stage.services.errors import InvalidArgumentError, NotFoundError
from ideahub_stage.services.pagination import Ordering, Page, SortKey, clamp_limit, paginate
from ideahub_stage.services.transaction import commit_or_raise

logger = logging.getLogger(__name__)

FEED_ORDER = Ordering(
    scope="ideas",
    keys=(
        SortKey("created_at", Idea.created_at, is_datetime=True),
        SortKey("id", Idea.id),
    ),
)


def _parse_description(description: Any) -> Any:
    if description is None or description == "":
        raise InvalidArgumentError("Title and description are required")
    if isinstance(description, str):
        try:
            return json.loads(description)
        except ValueError as err:
            raise InvalidArgumentError("Invalid description format") from err
    return description


def create_idea(
    db: Session,
    *,
    author_id: str,
    title: str,
    description: Any,
    uploaded_images: list[str] | None = None,
) -> Idea:
    """Validate and persist a new idea.

    Args:
        db: Database session
        author_id: Identity of the posting user
        title: Raw title; trimmed before the length check
        description: Editor document, either decoded JSON or a JSON string
        uploaded_images: URLs returned by the object storage upload step

    Raises:
        InvalidArgumentError: If the title or description is invalid.
    """
    title_trimmed = title.strip()
    if not title_trimmed:
        raise InvalidArgumentError("Title and description are required")
    if not (
        settings.idea_title_min_length
        <= len(title_trimmed)
        <= settings.idea_title_max_length
    ):
        raise InvalidArgumentError(
            f"Title must be between {settings.idea_title_min_length} "
            f"and {settings.idea_title_max_length} characters"
        )
    document = _parse_description(description)

    idea = Idea(
        title=title_trimmed,
        description=document,
        uploaded_images=list(uploaded_images or []),
        author_user_id=author_id,
        votes_count=0,
    )
    db.add(idea)
    commit_or_raise(db, "Failed to create idea")
    db.refresh(idea)

    logger.info("Idea %s created by %s", idea.id, author_id)
    return idea


def get_idea(db: Session, idea_id: int) -> Idea:
    """Return an idea or raise ``NotFoundError``."""
    idea = db.get(Idea, idea_id)
    if idea is None:
        raise NotFoundError("Idea not found")
    return idea


def list_ideas(db: Session, *, cursor: str | None = None, limit: int | None = None) -> Page[Idea]:
    """Return one page of the feed, newest first."""
    page_size = clamp_limit(
        limit,
        default=settings.ideas_page_default,
        maximum=settings.ideas_page_max,
    )
    return paginate(db, select(Idea), FEED_ORDER, cursor=cursor, limit=page_size)


def comment_counts(db: Session, idea_ids: Iterable[int]) -> dict[int, int]:
    """Count live (non-deleted) comments per idea."""
    ids = list(idea_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Comment.idea_id, func.count(Comment.id))
        .where(Comment.idea_id.in_(ids), Comment.is_deleted.is_(False))
        .group_by(Comment.idea_id)
    ).all()
    return {idea_id: count for idea_id, count in rows}


def to_idea_out(
    idea: Idea,
    *,
    comment_count: int = 0,
    user_vote: VoteType | None = None,
) -> IdeaOut:
    """Convert an Idea ORM instance to an API schema."""
    return IdeaOut(
        id=idea.id,
        title=idea.title,
        description=idea.description,
        uploaded_images=list(idea.uploaded_images or []),
        author_id=idea.author_user_id,
        votes_count=idea.votes_count,
        created_at=idea.created_at,
        updated_at=idea.updated_at,
        author=IdeaAuthor.model_validate(idea.author),
        comment_count=comment_count,
        user_vote=user_vote,
    )
