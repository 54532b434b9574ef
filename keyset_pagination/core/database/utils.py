"""Statement helpers shared by the pagination layer.

Example:
    from keyset_pagination.core.database.utils import count_statement, has_limit

    total = (await session.execute(count_statement(stmt))).scalar_one()
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select


def has_limit(statement: Select[Any]) -> bool:
    """Whether ``statement`` already carries a LIMIT clause."""
    return getattr(statement, "_limit_clause", None) is not None


def count_statement(statement: Select[Any]) -> Select[tuple[int]]:
    """``SELECT count(*)`` over ``statement`` ignoring ORDER BY, LIMIT and OFFSET.

    Filters and joins are kept, so the count matches what the statement would
    return without paging.
    """
    inner = statement.order_by(None).limit(None).offset(None)
    return select(func.count()).select_from(inner.subquery())


__all__ = ["count_statement", "has_limit"]
