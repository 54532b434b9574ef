"""Keyset (cursor) pagination for SQLAlchemy.

Example:
    from keyset_pagination import OrderingSpec, PageExecutor

    ordering = OrderingSpec.from_pairs([(Movie.title, "asc"), (Movie.id, "desc")])
    page = await PageExecutor().page(session, select(Movie), ordering, cursor, limit=10)
"""

from keyset_pagination.core.exceptions import (
    AppException,
    InvalidCursorError,
    OrderingMismatchError,
    PaginationError,
)
from keyset_pagination.core.pagination import (
    CursorCodec,
    CursorFilter,
    Edge,
    OrderingRule,
    OrderingSpec,
    PageExecutor,
    PageInfo,
    PageInfoCalculator,
    PageResult,
    build_keyset_predicate,
    order_by_coalesce,
    order_by_explicit,
)
from keyset_pagination.core.settings import (
    PageInfoOptions,
    PaginationSettings,
    get_pagination_settings,
)

__all__ = [
    "AppException",
    "CursorCodec",
    "CursorFilter",
    "Edge",
    "InvalidCursorError",
    "OrderingMismatchError",
    "OrderingRule",
    "OrderingSpec",
    "PageExecutor",
    "PageInfo",
    "PageInfoCalculator",
    "PageInfoOptions",
    "PageResult",
    "PaginationError",
    "PaginationSettings",
    "build_keyset_predicate",
    "get_pagination_settings",
    "order_by_coalesce",
    "order_by_explicit",
]
