# src/ideahub_stage/api/v1/endpoints/votes.py
"""Vote-related endpoints for the IdeaHub API."""

from fastapi import APIRouter

from ideahub_stage.api.v1.dependencies import CurrentUserDep, EntityIdPath, SessionDep
from ideahub_stage.schemas.vote import (
    CommentVoteCreate,
    IdeaVoteCreate,
    MyVoteResponse,
    VoteResponse,
)
from ideahub_stage.services.errors import NotFoundError
from ideahub_stage.services.votes import (
    COMMENT_LEDGER,
    IDEA_LEDGER,
    apply_vote,
    get_user_vote,
    parse_vote_type,
)

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/comments", response_model=VoteResponse)
def vote_comment(
    vote_data: CommentVoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Set, flip or remove the caller's vote on a comment."""
    desired = parse_vote_type(vote_data.vote_type)
    result = apply_vote(
        db,
        COMMENT_LEDGER,
        voter_id=current_user.id,
        target_id=vote_data.comment_id,
        desired=desired,
    )
    return VoteResponse(
        votes_count=result.votes_count,
        user_vote=result.user_vote,
        message=result.message,
    )


@router.post("/ideas", response_model=VoteResponse)
def vote_idea(
    vote_data: IdeaVoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Set, flip or remove the caller's vote on an idea."""
    desired = parse_vote_type(vote_data.vote_type)
    result = apply_vote(
        db,
        IDEA_LEDGER,
        voter_id=current_user.id,
        target_id=vote_data.idea_id,
        desired=desired,
    )
    return VoteResponse(
        votes_count=result.votes_count,
        user_vote=result.user_vote,
        message=result.message,
    )


@router.get("/comments/{comment_id}/my-vote", response_model=MyVoteResponse)
def get_my_comment_vote(
    comment_id: EntityIdPath,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get the caller's vote on a specific comment."""
    if db.get(COMMENT_LEDGER.entity, comment_id) is None:
        raise NotFoundError("Comment not found")
    vote = get_user_vote(db, COMMENT_LEDGER, voter_id=current_user.id, target_id=comment_id)
    return MyVoteResponse(user_vote=vote)


@router.get("/ideas/{idea_id}/my-vote", response_model=MyVoteResponse)
def get_my_idea_vote(
    idea_id: EntityIdPath,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get the caller's vote on a specific idea."""
    if db.get(IDEA_LEDGER.entity, idea_id) is None:
        raise NotFoundError("Idea not found")
    vote = get_user_vote(db, IDEA_LEDGER, voter_id=current_user.id, target_id=idea_id)
    return MyVoteResponse(user_vote=vote)
