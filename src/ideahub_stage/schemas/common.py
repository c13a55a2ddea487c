"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ideahub_stage.db.time import as_utc

# Integer primary keys are 32-bit on Postgres.
MAX_ENTITY_ID = 2**31 - 1

UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
EntityId = Annotated[int, Field(ge=1, le=MAX_ENTITY_ID)]


class APIModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    """Acknowledgement carrying a human-readable message."""

    success: bool = True
    message: str
