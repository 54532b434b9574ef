"""SQLAlchemy statement helpers."""

from keyset_pagination.core.database.filters import Limit, OrderBy, StatementFilter
from keyset_pagination.core.database.utils import count_statement, has_limit

__all__ = [
    "Limit",
    "OrderBy",
    "StatementFilter",
    "count_statement",
    "has_limit",
]
