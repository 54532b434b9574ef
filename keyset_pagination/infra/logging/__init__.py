"""Logging infrastructure.

Usage:
    from keyset_pagination.infra.logging import get_lazy_logger

    logger = get_lazy_logger(__name__)
    logger.debug(lambda: f"Expensive: {compute_heavy_data()}")  # Only runs if DEBUG enabled
"""

from keyset_pagination.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "LazyLoggerAdapter",
    "get_lazy_logger",
]
