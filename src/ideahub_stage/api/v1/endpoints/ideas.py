# src/ideahub_stage/api/v1/endpoints/ideas.py
"""Idea-related endpoints for the IdeaHub API."""

from fastapi import APIRouter, Query, status
from sqlalchemy.orm import Session

from ideahub_stage.api.v1.dependencies import (
    CurrentUserDep,
    EntityIdPath,
    OptionalUserDep,
    SessionDep,
)
from ideahub_stage.models import Idea, User
from ideahub_stage.schemas.idea import IdeaCreate, IdeaListResponse, IdeaOut
from ideahub_stage.services import ideas as idea_service
from ideahub_stage.services.votes import IDEA_LEDGER, user_votes_for

router = APIRouter(prefix="/ideas", tags=["ideas"])


def present_ideas(db: Session, ideas: list[Idea], viewer: User | None) -> list[IdeaOut]:
    """Attach comment counts and the viewer's votes to a page of ideas."""
    ids = [idea.id for idea in ideas]
    counts = idea_service.comment_counts(db, ids)
    votes = user_votes_for(
        db,
        IDEA_LEDGER,
        voter_id=viewer.id if viewer else None,
        target_ids=ids,
    )
    return [
        idea_service.to_idea_out(
            idea,
            comment_count=counts.get(idea.id, 0),
            user_vote=votes.get(idea.id),
        )
        for idea in ideas
    ]


@router.post("", response_model=IdeaOut, status_code=status.HTTP_201_CREATED)
def create_idea(
    idea_data: IdeaCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> IdeaOut:
    """Post a new idea.

    Args:
        idea_data: Title, editor document and uploaded image URLs
        current_user: Authenticated author
        db: Database session

    Returns:
        The stored idea

    Raises:
        UnauthenticatedError: If the caller is anonymous
        InvalidArgumentError: If the title or description is invalid
    """
    idea = idea_service.create_idea(
        db,
        author_id=current_user.id,
        title=idea_data.title,
        description=idea_data.description,
        uploaded_images=idea_data.uploaded_images,
    )
    return idea_service.to_idea_out(idea)


@router.get("", response_model=IdeaListResponse)
def list_ideas(
    db: SessionDep,
    viewer: OptionalUserDep,
    cursor: str | None = Query(None, description="Opaque cursor from a previous page"),
    limit: int | None = Query(None, ge=1, description="Page size; capped at 50"),
) -> IdeaListResponse:
    """List the idea feed, newest first."""
    page = idea_service.list_ideas(db, cursor=cursor, limit=limit)
    return IdeaListResponse(
        ideas=present_ideas(db, page.items, viewer),
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@router.get("/{idea_id}", response_model=IdeaOut)
def get_idea(idea_id: EntityIdPath, db: SessionDep, viewer: OptionalUserDep) -> IdeaOut:
    """Get a single idea by ID."""
    idea = idea_service.get_idea(db, idea_id)
    return present_ideas(db, [idea], viewer)[0]
