# src/ideahub_stage/api/v1/endpoints/comments.py
"""Comment-related endpoints for the IdeaHub API."""

from fastapi import APIRouter, Query, status
from sqlalchemy.orm import Session

from ideahub_stage.api.v1.dependencies import (
    CurrentUserDep,
    EntityIdPath,
    OptionalUserDep,
    SessionDep,
)
from ideahub_stage.models import Comment, User
from ideahub_stage.schemas.comment import (
    CommentCreate,
    CommentCreateResponse,
    CommentEdit,
    CommentEditResponse,
    CommentListResponse,
    CommentOut,
    ReplyListResponse,
)
from ideahub_stage.schemas.common import MAX_ENTITY_ID, MessageResponse
from ideahub_stage.services import comments as comment_service
from ideahub_stage.services.votes import COMMENT_LEDGER, get_user_vote, user_votes_for

router = APIRouter(prefix="/comments", tags=["comments"])


def _present(db: Session, comments: list[Comment], viewer: User | None) -> list[CommentOut]:
    ids = [comment.id for comment in comments]
    counts = comment_service.reply_counts(db, ids)
    votes = user_votes_for(
        db,
        COMMENT_LEDGER,
        voter_id=viewer.id if viewer else None,
        target_ids=ids,
    )
    return [
        comment_service.to_comment_out(
            comment,
            reply_count=counts.get(comment.id, 0),
            user_vote=votes.get(comment.id),
        )
        for comment in comments
    ]


@router.post("", response_model=CommentCreateResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentCreateResponse:
    """Post a comment on an idea, or a reply when ``commentId`` is given."""
    comment = comment_service.create_comment(
        db,
        author_id=current_user.id,
        idea_id=comment_data.idea_id,
        content=comment_data.content,
        parent_id=comment_data.parent_id,
    )
    message = (
        "Reply posted successfully"
        if comment_data.parent_id is not None
        else "Comment posted successfully"
    )
    return CommentCreateResponse(comment=comment_service.to_comment_out(comment), message=message)


@router.get("", response_model=CommentListResponse)
def list_comments(
    db: SessionDep,
    viewer: OptionalUserDep,
    idea_id: int = Query(
        ..., alias="ideaId", ge=1, le=MAX_ENTITY_ID, description="Idea whose comments to list"
    ),
    cursor: str | None = Query(None, description="Opaque cursor from a previous page"),
    limit: int | None = Query(None, ge=1, description="Page size; capped at 100"),
) -> CommentListResponse:
    """List top-level comments of an idea, most voted first, then newest."""
    page = comment_service.list_comments(db, idea_id=idea_id, cursor=cursor, limit=limit)
    return CommentListResponse(
        comments=_present(db, page.items, viewer),
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@router.get("/{comment_id}/replies", response_model=ReplyListResponse)
def list_replies(
    comment_id: EntityIdPath,
    db: SessionDep,
    viewer: OptionalUserDep,
    cursor: str | None = Query(None, description="Opaque cursor from a previous page"),
    limit: int | None = Query(None, ge=1, description="Page size; capped at 50"),
) -> ReplyListResponse:
    """List direct replies to a comment, most voted first, then oldest."""
    page = comment_service.list_replies(db, comment_id=comment_id, cursor=cursor, limit=limit)
    return ReplyListResponse(
        replies=_present(db, page.items, viewer),
        has_more=page.has_more,
        next_cursor=page.next_cursor,
    )


@router.patch("/{comment_id}", response_model=CommentEditResponse)
def edit_comment(
    comment_id: EntityIdPath,
    edit_data: CommentEdit,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentEditResponse:
    """Replace the text of one of the caller's comments."""
    comment = comment_service.edit_comment(
        db,
        author_id=current_user.id,
        comment_id=comment_id,
        content=edit_data.content,
    )
    presented = comment_service.to_comment_out(
        comment,
        reply_count=comment_service.reply_counts(db, [comment.id]).get(comment.id, 0),
        user_vote=get_user_vote(
            db, COMMENT_LEDGER, voter_id=current_user.id, target_id=comment.id
        ),
    )
    return CommentEditResponse(comment=presented, message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: EntityIdPath,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Soft-delete one of the caller's comments; its replies stay visible."""
    comment_service.soft_delete_comment(db, author_id=current_user.id, comment_id=comment_id)
    return MessageResponse(message="Comment deleted successfully")
