"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolate cached settings from the environment
    - Database Fixtures: SQLAlchemy engine, session and seeded movies
    - Pagination Fixtures: executors and a statement counter
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from keyset_pagination.core.pagination import PageExecutor
from keyset_pagination.core.settings import (
    PageInfoOptions,
    PaginationSettings,
    get_pagination_settings,
)
from tests.fixtures import Base, Movie, build_movies

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests don't pick up pagination overrides from the developer's shell
for _key in [key for key in os.environ if key.startswith("PAGINATION_")]:
    del os.environ[_key]


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset the cached settings around every test."""
    get_pagination_settings.cache_clear()
    yield
    get_pagination_settings.cache_clear()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create async database session with the movie tables created."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def movies(db_session: AsyncSession) -> list[Movie]:
    """Seed the movie table and return the inserted rows."""
    rows = build_movies()
    db_session.add_all(rows)
    await db_session.commit()
    return rows


# ============================================================================
# Pagination Fixtures
# ============================================================================


@pytest.fixture
def executor() -> PageExecutor:
    """Executor with every metadata value and per-record cursors enabled."""
    return PageExecutor(
        PaginationSettings(
            default_limit=10,
            include_edges=True,
            page_info=PageInfoOptions.all(),
        )
    )


@pytest.fixture
def bare_executor() -> PageExecutor:
    """Executor computing no optional metadata."""
    return PageExecutor(PaginationSettings(default_limit=10))


@pytest.fixture
def statement_counter(db_engine: AsyncEngine) -> Callable[[], list[str]]:
    """Record every SQL statement sent through ``db_engine``.

    Returns:
        Callable returning the statements executed so far (and resetting them).
    """
    statements: list[str] = []

    def before_cursor_execute(conn: Any, cursor: Any, statement: str, *args: Any) -> None:
        statements.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", before_cursor_execute)

    def drain() -> list[str]:
        executed = list(statements)
        statements.clear()
        return executed

    return drain
