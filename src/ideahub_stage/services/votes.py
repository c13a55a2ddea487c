"""Vote ledger and aggregate counter maintenance.

Each votable entity (idea or comment) keeps a denormalized ``votes_count``
that must always equal ``#UP - #DOWN`` over its ledger rows. The write path
below is the only place that changes it: the ledger row and the counter are
updated in the same transaction, and the counter moves by a database-side
increment so concurrent voters on the same target never lose updates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ideahub_stage.models import Comment, CommentVote, Idea, IdeaVote, VoteType
from ideahub_stage.services.errors import (
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

# (existing, desired) -> change applied to votes_count
VOTE_DELTAS: dict[tuple[VoteType | None, VoteType | None], int] = {
    (None, VoteType.UP): 1,
    (None, VoteType.DOWN): -1,
    (VoteType.UP, VoteType.DOWN): -2,
    (VoteType.DOWN, VoteType.UP): 2,
    (VoteType.UP, None): -1,
    (VoteType.DOWN, None): 1,
    (None, None): 0,
    (VoteType.UP, VoteType.UP): 0,
    (VoteType.DOWN, VoteType.DOWN): 0,
}


@dataclass(frozen=True)
class Ledger:
    """Pairs a votable model with the table holding its per-voter rows."""

    label: str
    entity: Any
    vote: Any
    target_field: str

    @property
    def target_column(self) -> Any:
        return getattr(self.vote, self.target_field)


COMMENT_LEDGER = Ledger(label="Comment", entity=Comment, vote=CommentVote, target_field="comment_id")
IDEA_LEDGER = Ledger(label="Idea", entity=Idea, vote=IdeaVote, target_field="idea_id")


@dataclass(frozen=True)
class VoteResult:
    """Outcome of :func:`apply_vote`."""

    votes_count: int
    user_vote: VoteType | None
    delta: int

    @property
    def message(self) -> str:
        if self.user_vote is None:
            return "Vote removed"
        return "Upvoted" if self.user_vote is VoteType.UP else "Downvoted"


@dataclass(frozen=True)
class CountDrift:
    """A target whose stored counter disagrees with its ledger."""

    target_id: int
    stored: int
    expected: int


def parse_vote_type(raw: object) -> VoteType | None:
    """Validate a client-supplied vote type; ``None`` means "no vote"."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidArgumentError("Invalid vote type")
    try:
        return VoteType(raw)
    except ValueError as err:
        raise InvalidArgumentError("Invalid vote type") from err


def vote_delta(existing: VoteType | None, desired: VoteType | None) -> int:
    """Return the counter change for moving a voter from ``existing`` to ``desired``."""
    return VOTE_DELTAS[(existing, desired)]


def _apply_vote_once(
    db: Session,
    ledger: Ledger,
    *,
    voter_id: str,
    target_id: int,
    desired: VoteType | None,
) -> VoteResult:
    entity = ledger.entity
    if db.scalar(select(entity.id).where(entity.id == target_id)) is None:
        raise NotFoundError(f"{ledger.label} not found")

    key = {ledger.target_field: target_id, "voter_user_id": voter_id}
    # Serializes concurrent calls from the same voter on the same target.
    existing = db.scalars(
        select(ledger.vote)
        .filter_by(**key)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).first()
    current = VoteType(existing.type) if existing is not None else None
    delta = vote_delta(current, desired)

    if desired is None:
        if existing is not None:
            db.delete(existing)
    elif existing is None:
        db.add(ledger.vote(**key, type=desired.value))
    elif existing.type != desired.value:
        existing.type = desired.value
    db.flush()

    if delta:
        db.execute(
            update(entity)
            .where(entity.id == target_id)
            .values(votes_count=entity.votes_count + delta)
            .execution_options(synchronize_session="fetch")
        )
    votes_count = db.scalar(select(entity.votes_count).where(entity.id == target_id))
    db.commit()

    logger.debug(
        "%s %s vote by %s: %s -> %s (delta %+d, total %s)",
        ledger.label,
        target_id,
        voter_id,
        current.value if current else None,
        desired.value if desired else None,
        delta,
        votes_count,
    )
    return VoteResult(votes_count=int(votes_count or 0), user_vote=desired, delta=delta)


def apply_vote(
    db: Session,
    ledger: Ledger,
    *,
    voter_id: str | None,
    target_id: int,
    desired: VoteType | None,
) -> VoteResult:
    """Set ``voter_id``'s vote on a target to ``desired`` and return the new total.

    Calling again with the same ``desired`` is a no-op (delta 0).

    Raises:
        UnauthenticatedError: If there is no voter identity.
        NotFoundError: If the target does not exist.
        InternalError: If the transaction fails; nothing is committed.
    """
    if voter_id is None:
        raise UnauthenticatedError("You must be logged in to vote")

    try:
        try:
            return _apply_vote_once(
                db, ledger, voter_id=voter_id, target_id=target_id, desired=desired
            )
        except IntegrityError:
            # Another request from this voter inserted the ledger row first;
            # re-read so this call applies its transition on top of it.
            db.rollback()
            logger.info(
                "Concurrent first vote on %s %s by %s; re-reading ledger",
                ledger.label,
                target_id,
                voter_id,
            )
            return _apply_vote_once(
                db, ledger, voter_id=voter_id, target_id=target_id, desired=desired
            )
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Vote on %s %s failed", ledger.label, target_id)
        raise InternalError("Failed to vote") from err


def get_user_vote(db: Session, ledger: Ledger, *, voter_id: str | None, target_id: int) -> VoteType | None:
    """Return the caller's current vote on a target, if any."""
    if voter_id is None:
        return None
    raw = db.scalar(
        select(ledger.vote.type).where(
            ledger.target_column == target_id,
            ledger.vote.voter_user_id == voter_id,
        )
    )
    return VoteType(raw) if raw is not None else None


def user_votes_for(
    db: Session,
    ledger: Ledger,
    *,
    voter_id: str | None,
    target_ids: Iterable[int],
) -> dict[int, VoteType]:
    """Resolve the caller's votes for a page of targets in one query."""
    ids = list(target_ids)
    if voter_id is None or not ids:
        return {}
    rows = db.execute(
        select(ledger.target_column, ledger.vote.type).where(
            ledger.vote.voter_user_id == voter_id,
            ledger.target_column.in_(ids),
        )
    ).all()
    return {target_id: VoteType(vote_type) for target_id, vote_type in rows}


def reconcile_vote_counts(db: Session, ledger: Ledger, *, fix: bool = False) -> list[CountDrift]:
    """Compare every stored counter with its ledger and optionally repair it.

    Intended for offline audits only; request paths never recompute totals.
    """
    signed = case((ledger.vote.type == VoteType.UP.value, 1), else_=-1)
    tally = (
        select(ledger.target_column.label("target_id"), func.sum(signed).label("expected"))
        .group_by(ledger.target_column)
        .subquery()
    )
    entity = ledger.entity
    rows = db.execute(
        select(entity.id, entity.votes_count, func.coalesce(tally.c.expected, 0))
        .outerjoin(tally, tally.c.target_id == entity.id)
        .order_by(entity.id)
    ).all()

    drifts = [
        CountDrift(target_id=target_id, stored=stored, expected=int(expected))
        for target_id, stored, expected in rows
        if stored != expected
    ]
    if fix and drifts:
        for drift in drifts:
            db.execute(
                update(entity)
                .where(entity.id == drift.target_id)
                .values(votes_count=drift.expected)
                .execution_options(synchronize_session="fetch")
            )
        db.commit()
        logger.warning("Repaired %d %s vote counters", len(drifts), ledger.label.lower())
    return drifts
