"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from keyset_pagination.core.database.filters import OrderBy, Limit

    stmt = select(Movie)
    stmt = OrderBy(rules).apply(stmt)
    stmt = Limit(50).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from keyset_pagination.core.database.utils import has_limit

if TYPE_CHECKING:
    from sqlalchemy import Select

    from keyset_pagination.core.pagination.ordering import OrderingRule


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which returns a modified SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class OrderBy(StatementFilter):
    """Replace the statement's ORDER BY with the given rules.

    Example:
        stmt = OrderBy(ordering.for_direction(backward=True)).apply(stmt)
        # ORDER BY created_at ASC, id DESC  (for declared created_at DESC, id ASC)
    """

    def __init__(self, rules: Sequence[OrderingRule]):
        self.rules = list(rules)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering to statement."""
        return statement.order_by(None).order_by(*(rule.order_clause() for rule in self.rules))


class Limit(StatementFilter):
    """LIMIT that defers to a limit already present on the statement.

    Example:
        stmt = Limit(50).apply(select(Movie))            # LIMIT 50
        stmt = Limit(50).apply(select(Movie).limit(5))   # LIMIT 5
    """

    def __init__(self, limit: int):
        if limit < 1:
            msg = "limit must be a positive integer"
            raise ValueError(msg)
        self.limit = limit

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply limit to statement."""
        if has_limit(statement):
            return statement
        return statement.limit(self.limit)


__all__ = [
    "Limit",
    "OrderBy",
    "StatementFilter",
]
