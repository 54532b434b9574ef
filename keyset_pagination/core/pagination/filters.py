"""Cursor filter for SQLAlchemy queries.

The CursorFilter implements the seek/keyset pagination method:
- Instead of OFFSET, WHERE conditions seek directly to the cursor position
- Results are stable even when data changes between pages

How it works:
    For ORDER BY created_at DESC, id ASC with a boundary at (t1, id1):
    WHERE (created_at < t1) OR (created_at = t1 AND id > id1)

Going backward flips every direction, both in the WHERE clause and in the
ORDER BY actually sent to the database, so LIMIT picks the rows right before
the boundary. The caller reverses those rows back to display order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_pagination.core.database.filters import Limit, OrderBy, StatementFilter
from keyset_pagination.core.pagination.predicates import build_keyset_predicate

if TYPE_CHECKING:
    from sqlalchemy import Select

    from keyset_pagination.core.pagination.cursor import KeysetTuple
    from keyset_pagination.core.pagination.ordering import OrderingSpec


class CursorFilter(StatementFilter):
    """Apply keyset pagination to a SQLAlchemy query.

    Example:
        from keyset_pagination.core.pagination import CursorFilter, OrderingSpec

        ordering = OrderingSpec.from_pairs([(Movie.created_at, "desc"), (Movie.id, "asc")])
        stmt = CursorFilter(ordering, boundary, limit=20).apply(select(Movie))

        # The filter adds:
        # 1. ORDER BY in traversal direction
        # 2. WHERE conditions to seek past the boundary
        # 3. LIMIT unless the statement already has one

    Attributes:
        rules: Direction-adjusted ordering rules
        boundary: Decoded sort-key tuple (None for the first page)
        limit: Page size used when the statement carries no LIMIT
        backward: Whether the page lies before the boundary
    """

    def __init__(
        self,
        ordering: OrderingSpec,
        boundary: KeysetTuple | None,
        *,
        limit: int,
        backward: bool = False,
    ) -> None:
        self.rules = ordering.for_direction(backward)
        self.boundary = boundary
        self.limit = limit
        self.backward = backward
        self.predicate = build_keyset_predicate(self.rules, boundary)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering, seek condition and limit to statement."""
        statement = OrderBy(self.rules).apply(statement)
        statement = self.apply_seek_condition(statement)
        return Limit(self.limit).apply(statement)

    def apply_seek_condition(self, statement: Select[Any]) -> Select[Any]:
        """Add the keyset WHERE condition, if there is a boundary."""
        if self.predicate is None:
            return statement
        return statement.where(self.predicate.to_clause())


__all__ = ["CursorFilter"]
