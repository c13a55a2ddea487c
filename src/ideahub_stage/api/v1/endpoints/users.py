# src/ideahub_stage/api/v1/endpoints/users.py
"""Public profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from ideahub_stage.api.v1.dependencies import OptionalUserDep, SessionDep
from ideahub_stage.api.v1.endpoints.ideas import present_ideas
from ideahub_stage.schemas.user import (
    ProfileComment,
    ProfileCommentsResponse,
    ProfileIdeaRef,
    ProfileIdeasResponse,
    ProfileOut,
    ProfileUpvote,
    ProfileUpvotesResponse,
)
from ideahub_stage.services import profiles as profile_service
from ideahub_stage.services.profiles import SortBy
from ideahub_stage.services.votes import COMMENT_LEDGER, user_votes_for

router = APIRouter(prefix="/users", tags=["users"])

CursorQuery = Annotated[str | None, Query(description="Opaque cursor from a previous page")]
LimitQuery = Annotated[int | None, Query(ge=1, description="Page size; capped at 50")]
SortQuery = Annotated[SortBy, Query(alias="sortBy", description="latest or top")]


@router.get("/{username}", response_model=ProfileOut)
def get_profile(username: str, db: SessionDep) -> ProfileOut:
    """Return a user's public profile with activity counters."""
    summary = profile_service.get_profile(db, username)
    user = summary.user
    return ProfileOut(
        id=user.id,
        username=user.username,
        name=user.name,
        image=user.image,
        bio=user.bio,
        created_at=user.created_at,
        ideas_count=summary.ideas_count,
        comments_count=summary.comments_count,
        upvotes_received=summary.upvotes_received,
        downvotes_received=summary.downvotes_received,
    )


@router.get("/{username}/ideas", response_model=ProfileIdeasResponse)
def list_user_ideas(
    username: str,
    db: SessionDep,
    viewer: OptionalUserDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = None,
    sort_by: SortQuery = "latest",
) -> ProfileIdeasResponse:
    """List ideas posted by a user."""
    page = profile_service.list_user_ideas(
        db, username=username, sort_by=sort_by, cursor=cursor, limit=limit
    )
    return ProfileIdeasResponse(
        ideas=present_ideas(db, page.items, viewer),
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@router.get("/{username}/comments", response_model=ProfileCommentsResponse)
def list_user_comments(
    username: str,
    db: SessionDep,
    viewer: OptionalUserDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = None,
    sort_by: SortQuery = "latest",
) -> ProfileCommentsResponse:
    """List a user's live comments, each with the idea it was posted on."""
    page = profile_service.list_user_comments(
        db, username=username, sort_by=sort_by, cursor=cursor, limit=limit
    )
    votes = user_votes_for(
        db,
        COMMENT_LEDGER,
        voter_id=viewer.id if viewer else None,
        target_ids=[comment.id for comment in page.items],
    )
    comments = [
        ProfileComment(
            id=comment.id,
            content=comment.content,
            votes_count=comment.votes_count,
            created_at=comment.created_at,
            parent_id=comment.parent_comment_id,
            idea=ProfileIdeaRef(id=comment.idea.id, title=comment.idea.title),
            user_vote=votes.get(comment.id),
        )
        for comment in page.items
    ]
    return ProfileCommentsResponse(
        comments=comments,
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@router.get("/{username}/upvotes", response_model=ProfileUpvotesResponse)
def list_user_upvotes(
    username: str,
    db: SessionDep,
    viewer: OptionalUserDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = None,
    sort_by: SortQuery = "latest",
) -> ProfileUpvotesResponse:
    """List ideas the caller upvoted; only visible to the profile owner."""
    page = profile_service.list_user_upvotes(
        db,
        viewer_id=viewer.id if viewer else None,
        username=username,
        sort_by=sort_by,
        cursor=cursor,
        limit=limit,
    )
    ideas = present_ideas(db, [vote.idea for vote in page.items], viewer)
    return ProfileUpvotesResponse(
        votes=[
            ProfileUpvote(voted_at=vote.created_at, idea=idea)
            for vote, idea in zip(page.items, ideas, strict=True)
        ],
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )
