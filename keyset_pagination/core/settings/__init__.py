"""Pydantic Settings v2 configuration.

Import settings via the cached loader:
    from keyset_pagination.core.settings import get_pagination_settings

Tests that tweak the environment call ``get_pagination_settings.cache_clear()``.
"""

from __future__ import annotations

from functools import lru_cache

from .pagination import PageInfoOptions, PaginationSettings


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


__all__ = [
    "PageInfoOptions",
    "PaginationSettings",
    "get_pagination_settings",
]
