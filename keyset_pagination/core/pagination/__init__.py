"""Keyset (cursor) pagination over SQLAlchemy statements.

This module provides cursor-based pagination that is:
- Stable: Results don't shift when rows are inserted between pages
- Performant: Uses indexed seeks instead of OFFSET scans
- Reversible: Paging forward then backward lands on the same page boundaries

Usage:
    ordering = OrderingSpec.from_pairs([(Movie.created_at, "desc"), (Movie.id, "asc")])
    executor = PageExecutor()

    page = await executor.page(session, select(Movie), ordering, cursor=after, limit=20)
    older = await executor.next_page(session, select(Movie), ordering, page.page_info.next)
    newer = await executor.previous_page(session, select(Movie), ordering, page.page_info.previous)

Cursors are opaque URL-safe strings that clients pass back unchanged.
"""

from keyset_pagination.core.pagination.cursor import CursorCodec, KeysetTuple
from keyset_pagination.core.pagination.executor import PageExecutor
from keyset_pagination.core.pagination.filters import CursorFilter
from keyset_pagination.core.pagination.ordering import (
    OrderingRule,
    OrderingSpec,
    column_to_property,
    order_by_coalesce,
    order_by_explicit,
)
from keyset_pagination.core.pagination.page_info import PageInfoCalculator
from keyset_pagination.core.pagination.predicates import build_keyset_predicate
from keyset_pagination.core.pagination.schemas import Edge, PageInfo, PageResult

__all__ = [
    # Cursor utilities
    "CursorCodec",
    # Filter
    "CursorFilter",
    # Schemas
    "Edge",
    "KeysetTuple",
    # Ordering
    "OrderingRule",
    "OrderingSpec",
    # Execution
    "PageExecutor",
    "PageInfo",
    "PageInfoCalculator",
    "PageResult",
    # Predicates
    "build_keyset_predicate",
    "column_to_property",
    "order_by_coalesce",
    "order_by_explicit",
]
