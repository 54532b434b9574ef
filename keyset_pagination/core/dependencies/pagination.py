"""Cursor pagination dependency for FastAPI routes.

Usage:
    from keyset_pagination.core.dependencies.pagination import CursorPagination

    @router.get("/movies", response_model=PageResult[MovieResponse])
    async def list_movies(
        params: CursorPagination,
        session: AsyncSession = Depends(get_session),
    ) -> PageResult[Movie]:
        return await executor.page(
            session,
            select(Movie),
            MOVIE_ORDERING,
            params.cursor,
            backward=params.before,
            limit=params.limit,
        )
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel, Field

from keyset_pagination.core.settings import get_pagination_settings


class CursorParams(BaseModel):
    """Cursor pagination parameters.

    Attributes:
        cursor: Cursor from a previous page (None for an end of the list).
        before: Fetch the page before the cursor instead of after it.
        limit: Maximum number of records to return.
    """

    cursor: str | None = Field(default=None, description="Opaque cursor from a previous page")
    before: bool = Field(default=False, description="Page backward from the cursor")
    limit: int = Field(ge=1, description="Maximum number of records to return")

    model_config = {"frozen": True}


def get_cursor_params(
    cursor: Annotated[
        str | None,
        Query(description="Opaque cursor from a previous page's next/previous"),
    ] = None,
    before: Annotated[
        bool,
        Query(description="Fetch the page before the cursor"),
    ] = False,
    limit: Annotated[
        int | None,
        Query(ge=1, description="Maximum number of records to return"),
    ] = None,
) -> CursorParams:
    """Get cursor pagination parameters.

    Uses the settings default when no limit is given and clamps to the
    configured maximum.

    Returns:
        CursorParams with validated values.
    """
    settings = get_pagination_settings()
    effective_limit = min(limit or settings.default_limit, settings.max_limit)
    return CursorParams(cursor=cursor or None, before=before, limit=effective_limit)


CursorPagination = Annotated[CursorParams, Depends(get_cursor_params)]


__all__ = ["CursorPagination", "CursorParams", "get_cursor_params"]
