"""Walk a whole result set page by page, forward and then back.

The reference order is whatever the database returns for the same ORDER BY
without pagination, so engine-specific sorting (collation, NULL placement)
never has to be re-implemented in the tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_pagination.core.database.filters import OrderBy

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_pagination.core.pagination import OrderingSpec, PageExecutor


async def fetch_ordered(session: AsyncSession, statement: Select[Any], ordering: OrderingSpec) -> list[Any]:
    result = await session.execute(OrderBy(ordering.for_direction(False)).apply(statement))
    return list(result.scalars().all())


def ids(records: list[Any]) -> list[int]:
    return [record.id for record in records]


async def assert_round_trip(
    executor: PageExecutor,
    session: AsyncSession,
    statement: Select[Any],
    ordering: OrderingSpec,
    page_size: int,
) -> None:
    """Page to the end, past it, back to the start and past that."""
    expected = ids(await fetch_ordered(session, statement, ordering))
    total = len(expected)
    assert total > 0

    cursor = None
    for offset in range(0, total, page_size):
        end = min(offset + page_size, total)
        page = await executor.page(session, statement, ordering, cursor, limit=end - offset)
        info = page.page_info
        where = f"rows {offset}-{end}/{total} size={page_size}"

        assert ids(page.records) == expected[offset:end], where
        assert page.nodes == page.records, where
        assert info.total == total, where
        assert info.remaining == total - end, where
        assert info.remaining_after == total - end, where
        assert info.remaining_before == offset, where
        assert info.has_more is (end < total), where
        assert info.has_next is (end < total), where
        assert info.has_previous is (offset > 0), where

        cursor = info.next

    past_end = await executor.page(session, statement, ordering, cursor, limit=5)
    assert past_end.records == []
    assert past_end.page_info.next == cursor

    cursor = past_end.page_info.previous
    end = total
    while end > 0:
        offset = max(0, end - page_size)
        page = await executor.page(session, statement, ordering, cursor, backward=True, limit=end - offset)
        info = page.page_info
        where = f"back rows {offset}-{end}/{total} size={page_size}"

        assert ids(page.records) == expected[offset:end], where
        assert info.total == total, where
        assert info.remaining == offset, where
        assert info.remaining_after == total - end, where
        assert info.remaining_before == offset, where
        assert info.has_more is (offset > 0), where
        assert info.has_next is (end < total), where
        assert info.has_previous is (offset > 0), where

        cursor = info.previous
        end = offset

    before_start = await executor.page(session, statement, ordering, cursor, backward=True, limit=5)
    assert before_start.records == []
    assert before_start.page_info.previous == cursor

    restart = await executor.page(session, statement, ordering, before_start.page_info.next, limit=page_size)
    assert ids(restart.records) == expected[:page_size]


async def assert_edges(
    executor: PageExecutor,
    session: AsyncSession,
    statement: Select[Any],
    ordering: OrderingSpec,
) -> None:
    """Every record's own cursor seeks to the rows right after/before it."""
    expected = ids(await fetch_ordered(session, statement, ordering))
    total = len(expected)
    first_page = await executor.page(session, statement, ordering)
    assert first_page.edges is not None
    size = len(first_page.records)

    for i, edge in enumerate(first_page.edges):
        after = await executor.page(session, statement, ordering, edge.cursor)
        assert ids(after.records) == expected[i + 1 : i + 1 + size]
        assert after.page_info.remaining_before == i + 1
        assert after.page_info.remaining == total - len(after.records) - i - 1
        assert after.page_info.has_previous is True

        before = await executor.page(session, statement, ordering, edge.cursor, backward=True)
        assert ids(before.records) == expected[max(0, i - size) : i]
        assert before.page_info.remaining_after == total - i
        assert before.page_info.has_previous is False
