"""Pagination response schemas.

A page is returned as :class:`PageResult`: the records in declared order,
navigation cursors plus any metadata that was requested, and optionally one
:class:`Edge` per record carrying that record's own cursor.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Pagination metadata.

    ``next`` and ``previous`` are always present; everything else is None
    unless enabled through :class:`~keyset_pagination.core.settings.PageInfoOptions`.

    Attributes:
        next: Cursor for the page after this one
        previous: Cursor for the page before this one
        total: Row count ignoring pagination
        remaining: Rows left in the traversal direction after this page
        remaining_before: Rows before this page in display order
        remaining_after: Rows after this page in display order
        has_more: Whether ``remaining`` is positive
        has_next: Whether rows exist after this page
        has_previous: Whether rows exist before this page
    """

    next: str = Field(description="Cursor to fetch the next page")
    previous: str = Field(description="Cursor to fetch the previous page")
    total: int | None = Field(default=None, description="Total count (optional)")
    remaining: int | None = Field(default=None, description="Rows left in traversal direction")
    remaining_before: int | None = Field(default=None, description="Rows before this page")
    remaining_after: int | None = Field(default=None, description="Rows after this page")
    has_more: bool | None = Field(default=None, description="Whether more rows exist in traversal direction")
    has_next: bool | None = Field(default=None, description="Whether a next page exists")
    has_previous: bool | None = Field(default=None, description="Whether a previous page exists")

    model_config = ConfigDict(frozen=True)


class Edge(BaseModel, Generic[T]):
    """A record together with its own cursor.

    Paging forward from ``cursor`` returns the rows after ``node``; paging
    backward returns the rows before it.
    """

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")

    model_config = ConfigDict(arbitrary_types_allowed=True)


class PageResult(BaseModel, Generic[T]):
    """One page of records.

    Usage:
        result = await executor.page(session, stmt, ordering, cursor=request_cursor)
        for movie in result.records:
            ...
        next_cursor = result.page_info.next

    Attributes:
        records: Records in declared order, regardless of traversal direction
        page_info: Navigation cursors and requested metadata
        edges: Per-record cursors (only when edges are enabled)
    """

    records: list[T] = Field(default_factory=list, description="List of records")
    page_info: PageInfo = Field(description="Pagination metadata")
    edges: list[Edge[T]] | None = Field(default=None, description="Records with cursors")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def nodes(self) -> list[T]:
        """Records unwrapped from ``edges`` (or ``records`` when edges are off)."""
        if self.edges is None:
            return list(self.records)
        return [edge.node for edge in self.edges]


__all__ = [
    "Edge",
    "PageInfo",
    "PageResult",
]
