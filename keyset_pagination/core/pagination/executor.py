"""Page execution for keyset pagination.

One request runs four stages in order:

1. Snapshot - keep the caller's statement, unfiltered and unlimited, for counting.
2. Resolve - decode the cursor against the ordering's arity.
3. Filter & order - flip directions when going backward, add the keyset
   predicate and the limit.
4. Execute & reassemble - run the query, restore declared order, derive the
   boundary cursors and the requested metadata.

Paging forward past the last row returns an empty page whose ``next`` cursor
is the boundary it was asked for and whose ``previous`` cursor is empty; an
empty backward cursor means "from the end", so paging back from there lands
on the last real page. The start of the list behaves symmetrically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_pagination.core.exceptions import InvalidCursorError
from keyset_pagination.core.pagination.cursor import CursorCodec
from keyset_pagination.core.pagination.filters import CursorFilter
from keyset_pagination.core.pagination.page_info import PageInfoCalculator
from keyset_pagination.core.pagination.schemas import PageInfo, PageResult
from keyset_pagination.core.settings import get_pagination_settings
from keyset_pagination.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_pagination.core.pagination.cursor import KeysetTuple
    from keyset_pagination.core.pagination.ordering import OrderingSpec
    from keyset_pagination.core.settings import PageInfoOptions, PaginationSettings


class PageExecutor:
    """Run keyset-paginated queries.

    Holds configuration only; every call is independent, so one executor can
    serve concurrent requests.

    Example:
        executor = PageExecutor(page_info=PageInfoOptions(total=True, has_next=True))
        ordering = OrderingSpec.from_pairs([(Movie.created_at, "desc"), (Movie.id, "asc")])

        result = await executor.page(
            session,
            select(Movie).where(Movie.is_published.is_(True)),
            ordering,
            cursor=request_cursor,
            limit=20,
        )
        next_cursor = result.page_info.next

    Attributes:
        default_limit: Page size used when neither the statement nor the call sets one
        include_edges: Attach a cursor to every record
        page_info: Metadata computed for every page
        codec: Cursor codec class
    """

    __slots__ = ("codec", "default_limit", "include_edges", "page_info", "_logger")

    def __init__(
        self,
        settings: PaginationSettings | None = None,
        *,
        page_info: PageInfoOptions | None = None,
        include_edges: bool | None = None,
        default_limit: int | None = None,
        codec: type[CursorCodec] = CursorCodec,
    ) -> None:
        settings = settings or get_pagination_settings()
        self.default_limit = default_limit or settings.default_limit
        self.include_edges = settings.include_edges if include_edges is None else include_edges
        self.page_info = page_info or settings.page_info
        self.codec = codec
        self._logger = get_lazy_logger(__name__)

    async def page(
        self,
        session: AsyncSession,
        statement: Select[Any],
        ordering: OrderingSpec,
        cursor: str | None = None,
        *,
        backward: bool = False,
        limit: int | None = None,
    ) -> PageResult[Any]:
        """Fetch the page after (or before, with ``backward``) ``cursor``.

        Args:
            session: Database session
            statement: SQLAlchemy select statement (filtered/joined, without pagination)
            ordering: Declared sort order
            cursor: Cursor from a previous page; empty or None starts at an end
            backward: Fetch the rows before the cursor instead of after
            limit: Page size when the statement has no LIMIT of its own

        Returns:
            PageResult with records in declared order and navigation cursors.
            An empty page is a valid result.

        Raises:
            InvalidCursorError: If the cursor does not decode against ``ordering``.
        """
        # Select is generative, so the caller's statement is the snapshot
        snapshot = statement

        try:
            boundary = self.codec.decode(cursor, ordering.arity)
        except InvalidCursorError as e:
            self._logger.warning(
                "Rejected pagination cursor",
                extra={"reason": e.detail, "error_type": e.type, "arity": ordering.arity},
            )
            raise

        cursor_filter = CursorFilter(
            ordering,
            boundary,
            limit=limit or self.default_limit,
            backward=backward,
        )
        paginated = cursor_filter.apply(statement)

        result = await session.execute(paginated)
        records = list(result.scalars().all())

        # Always present results in declared order, like turning pages in a book
        if backward:
            records.reverse()

        first = ordering.extract(records[0]) if records else _edge_fallback(boundary, backward)
        last = ordering.extract(records[-1]) if records else _edge_fallback(boundary, not backward)

        extra_info: dict[str, Any] = {}
        if self.page_info.needs_total or self.page_info.needs_filtered_count:
            extra_info = await PageInfoCalculator(self.page_info).calculate(
                session,
                snapshot=snapshot,
                filtered=paginated,
                page_size=len(records),
                backward=backward,
            )

        page_info = PageInfo(
            next=self.codec.encode(last),
            previous=self.codec.encode(first),
            **extra_info,
        )

        edges = None
        if self.include_edges:
            edges = [
                {"node": record, "cursor": self.codec.encode(ordering.extract(record))}
                for record in records
            ]

        self._logger.debug(
            lambda: (
                f"pagination.page: {ordering!r} backward={backward} "
                f"limit={cursor_filter.limit} -> {len(records)} records"
            )
        )

        return PageResult(records=records, page_info=page_info, edges=edges)

    async def next_page(
        self,
        session: AsyncSession,
        statement: Select[Any],
        ordering: OrderingSpec,
        cursor: str | None = None,
        *,
        limit: int | None = None,
    ) -> PageResult[Any]:
        """Fetch the page after ``cursor``."""
        return await self.page(session, statement, ordering, cursor, backward=False, limit=limit)

    async def previous_page(
        self,
        session: AsyncSession,
        statement: Select[Any],
        ordering: OrderingSpec,
        cursor: str | None = None,
        *,
        limit: int | None = None,
    ) -> PageResult[Any]:
        """Fetch the page before ``cursor``."""
        return await self.page(session, statement, ordering, cursor, backward=True, limit=limit)


def _edge_fallback(boundary: KeysetTuple | None, keep: bool) -> KeysetTuple | None:
    # An empty page keeps the boundary on the side it was fetched from
    return boundary if keep else None


__all__ = ["PageExecutor"]
