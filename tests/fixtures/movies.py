"""Movie model and seed data used by the pagination tests.

The data set is small but deliberately full of ties: titles, authors and
release dates repeat so every multi-column ordering has to fall through to
later columns, and ``subtitle`` is NULL for every fifth row.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from sqlalchemy import JSON, Date, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Movie(Base):
    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(100))
    author: Mapped[str] = mapped_column(String(100))
    # database column name differs from the attribute name
    alt_title: Mapped[str] = mapped_column("alt_title_col", String(100))
    subtitle: Mapped[str | None] = mapped_column(String(100), nullable=True)
    released_on: Mapped[date] = mapped_column(Date)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    def __repr__(self) -> str:
        return f"Movie(id={self.id}, title={self.title!r})"


AUTHORS = ("Ada", "Brook", "Cole")
MOVIE_COUNT = 24


def build_movies(count: int = MOVIE_COUNT) -> list[Movie]:
    """Deterministic movies with ids 1..count."""
    return [
        Movie(
            id=i,
            title=f"Movie {i % 6}",
            author=AUTHORS[i % 3],
            alt_title=f"Alt {i % 4}",
            subtitle=None if i % 5 == 0 else f"Sub {i % 7}",
            released_on=date(2020, 1, 1) + timedelta(days=i % 9),
            data={"meta": {"rank": i % 5}},
        )
        for i in range(1, count + 1)
    ]
