# src/ideahub_stage/api/v1/endpoints/me.py
"""Endpoint describing the authenticated caller."""

from fastapi import APIRouter

from ideahub_stage.api.v1.dependencies import CurrentUserDep
from ideahub_stage.schemas.user import AccountOut

router = APIRouter(tags=["users"])


@router.get("/me", response_model=AccountOut)
def get_me(current_user: CurrentUserDep) -> AccountOut:
    """Return the account behind the bearer token."""
    return AccountOut.model_validate(current_user)
