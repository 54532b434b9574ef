"""Optional page metadata.

Two counts feed every metadata value:

- ``total``: rows matched by the statement before pagination (the snapshot),
- ``matched``: rows matched once the keyset filter is applied, ignoring LIMIT.

``remaining`` is ``matched - len(records)``, i.e. what is left in the
traversal direction; ``total - matched`` is what lies on the other side of
the boundary. Each count is issued at most once, and only when an enabled
value depends on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_pagination.core.database.utils import count_statement
from keyset_pagination.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_pagination.core.settings import PageInfoOptions

logger = get_lazy_logger(__name__)


class PageInfoCalculator:
    """Compute the metadata values enabled in ``options``.

    Example:
        calculator = PageInfoCalculator(PageInfoOptions(total=True, has_next=True))
        info = await calculator.calculate(
            session, snapshot=stmt, filtered=filtered_stmt, page_size=10, backward=False
        )
        # {"total": 120, "has_next": True}
    """

    __slots__ = ("options",)

    def __init__(self, options: PageInfoOptions) -> None:
        self.options = options

    async def calculate(
        self,
        session: AsyncSession,
        *,
        snapshot: Select[Any],
        filtered: Select[Any],
        page_size: int,
        backward: bool,
    ) -> dict[str, Any]:
        """Run the needed counting queries and derive the enabled values.

        Args:
            session: Session the page query ran on.
            snapshot: Statement before ordering, keyset filter and limit.
            filtered: Statement with the keyset filter applied.
            page_size: Number of records on the page.
            backward: Traversal direction of the page.

        Returns:
            Mapping of enabled :class:`PageInfo` field names to values.
        """
        opts = self.options
        info: dict[str, Any] = {}

        total = None
        if opts.needs_total:
            total = await self._count(session, snapshot, "total")
            if opts.total:
                info["total"] = total

        if opts.needs_filtered_count:
            matched = await self._count(session, filtered, "matched")
            remaining = matched - page_size
            # rows on the other side of the boundary
            passed = total - matched if total is not None else None

            if opts.remaining:
                info["remaining"] = remaining
            if opts.has_more:
                info["has_more"] = remaining > 0
            if opts.remaining_before:
                info["remaining_before"] = remaining if backward else passed
            if opts.remaining_after:
                info["remaining_after"] = passed if backward else remaining
            if opts.has_next:
                info["has_next"] = passed > 0 if backward else remaining > 0
            if opts.has_previous:
                info["has_previous"] = remaining > 0 if backward else passed > 0

        return info

    async def _count(self, session: AsyncSession, statement: Select[Any], label: str) -> int:
        count = (await session.execute(count_statement(statement))).scalar_one()
        logger.debug(lambda: f"pagination.count[{label}] -> {count}")
        return int(count)


__all__ = ["PageInfoCalculator"]
