"""Test fixtures for pytest."""

from .movies import AUTHORS, MOVIE_COUNT, Base, Movie, build_movies

__all__ = [
    "AUTHORS",
    "MOVIE_COUNT",
    "Base",
    "Movie",
    "build_movies",
]
