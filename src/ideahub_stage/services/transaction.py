"""Commit helper that turns store failures into ``InternalError``."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ideahub_stage.services.errors import InternalError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, failure_detail: str) -> None:
    """Commit the session, rolling back and raising ``InternalError`` on failure.

    Failures are logged and surfaced; retrying is left to the caller.
    """
    try:
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Transaction rolled back: %s", failure_detail)
        raise InternalError(failure_detail) from err
