"""Keyset cursor pagination shared by every listing.

A cursor is URL-safe base64 of a small JSON object holding the scope that
issued it and the sort-key values of the last row on the page. Resuming
selects rows strictly after that position under the same ordering, so rows
inserted ahead of the cursor never shift later pages.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, and_, or_
from sqlalchemy.orm import Session

from ideahub_stage.db.time import as_utc
from ideahub_stage.services.errors import InvalidArgumentError

T = TypeVar("T")

# Sort keys are stored as 64-bit integers at most.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

__all__ = [
    "Ordering",
    "Page",
    "SortKey",
    "clamp_limit",
    "decode_cursor",
    "encode_cursor",
    "paginate",
]


@dataclass(frozen=True)
class SortKey:
    """One column of a composite ordering."""

    name: str
    column: Any
    descending: bool = True
    is_datetime: bool = False
    getter: Callable[[Any], Any] | None = None

    def value_of(self, item: Any) -> Any:
        """Read this key's value from a result row."""
        if self.getter is not None:
            return self.getter(item)
        return getattr(item, self.name)


@dataclass(frozen=True)
class Ordering:
    """Composite ordering; the last key must be unique per row."""

    scope: str
    keys: tuple[SortKey, ...]

    def for_scope(self, scope: str) -> Ordering:
        """Return the same ordering bound to a narrower scope tag."""
        return replace(self, scope=scope)

    def order_by(self) -> list[Any]:
        return [key.column.desc() if key.descending else key.column.asc() for key in self.keys]


@dataclass
class Page(Generic[T]):
    """A slice of a listing plus its continuation token."""

    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None
    has_more: bool = False


def clamp_limit(limit: int | None, *, default: int, maximum: int) -> int:
    """Apply the listing's default page size and cap it at ``maximum``."""
    if limit is None:
        return default
    return max(1, min(limit, maximum))


def encode_cursor(ordering: Ordering, item: Any) -> str:
    """Build the opaque token that resumes ``ordering`` after ``item``."""
    payload: dict[str, Any] = {"s": ordering.scope}
    for key in ordering.keys:
        value = key.value_of(item)
        payload[key.name] = as_utc(value).isoformat() if key.is_datetime else value
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(ordering: Ordering, token: str) -> dict[str, Any]:
    """Decode a token issued by :func:`encode_cursor` for the same scope.

    Raises:
        InvalidArgumentError: If the token is malformed or was issued by a
            different listing.
    """
    padding = "=" * (-len(token) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(token + padding))
    except ValueError as err:
        raise InvalidArgumentError("Invalid cursor") from err

    if not isinstance(payload, dict) or payload.get("s") != ordering.scope:
        raise InvalidArgumentError("Invalid cursor")

    values: dict[str, Any] = {}
    for key in ordering.keys:
        raw = payload.get(key.name)
        if key.is_datetime:
            if not isinstance(raw, str):
                raise InvalidArgumentError("Invalid cursor")
            try:
                values[key.name] = as_utc(datetime.fromisoformat(raw))
            except ValueError as err:
                raise InvalidArgumentError("Invalid cursor") from err
        else:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise InvalidArgumentError("Invalid cursor")
            if not _INT_MIN <= raw <= _INT_MAX:
                raise InvalidArgumentError("Invalid cursor")
            values[key.name] = raw
    return values


def _rows_after(keys: Sequence[SortKey], values: dict[str, Any]) -> Any:
    clauses = []
    for index, key in enumerate(keys):
        ties = [prev.column == values[prev.name] for prev in keys[:index]]
        value = values[key.name]
        beyond = key.column < value if key.descending else key.column > value
        clauses.append(and_(*ties, beyond))
    return or_(*clauses)


def paginate(
    db: Session,
    stmt: Select[Any],
    ordering: Ordering,
    *,
    cursor: str | None,
    limit: int,
) -> Page[Any]:
    """Run ``stmt`` as one page of ``ordering``.

    Fetches ``limit + 1`` rows; the extra row only signals that another page
    exists and is never returned.
    """
    if cursor:
        stmt = stmt.where(_rows_after(ordering.keys, decode_cursor(ordering, cursor)))

    rows = list(db.scalars(stmt.order_by(*ordering.order_by()).limit(limit + 1)))
    has_more = len(rows) > limit
    items = rows[:limit]
    next_cursor = encode_cursor(ordering, items[-1]) if has_more else None
    return Page(items=items, next_cursor=next_cursor, has_more=has_more)
