"""Pagination settings.

Environment variables use PAGINATION_ prefix; page metadata flags are nested
under PAGE_INFO with a double underscore delimiter.
Example: PAGINATION_DEFAULT_LIMIT=20, PAGINATION_PAGE_INFO__TOTAL=true
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PageInfoOptions(BaseModel):
    """Which page metadata values to compute.

    Every enabled value costs a counting query, so all are off by default.
    ``total`` needs a count of the unfiltered statement, ``remaining`` and
    ``has_more`` a count of the keyset-filtered statement; the direction aware
    values need both.
    """

    total: bool = False
    remaining: bool = False
    remaining_before: bool = False
    remaining_after: bool = False
    has_more: bool = False
    has_next: bool = False
    has_previous: bool = False

    model_config = {"frozen": True}

    @classmethod
    def all(cls) -> PageInfoOptions:
        """Options with every metadata value enabled."""
        return cls(**dict.fromkeys(cls.model_fields, True))

    @property
    def needs_total(self) -> bool:
        return (
            self.total
            or self.has_next
            or self.has_previous
            or self.remaining_before
            or self.remaining_after
        )

    @property
    def needs_filtered_count(self) -> bool:
        return (
            self.remaining
            or self.remaining_before
            or self.remaining_after
            or self.has_more
            or self.has_next
            or self.has_previous
        )


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when neither the statement nor the caller sets one.
        max_limit: Maximum page size accepted from HTTP clients.
        include_edges: Attach a per-record cursor to every result.
        page_info: Metadata values computed for every page.
    """

    default_limit: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    include_edges: bool = Field(
        default=False,
        description="Return a cursor for every record on the page",
    )
    page_info: PageInfoOptions = Field(
        default_factory=PageInfoOptions,
        description="Optional page metadata (each value costs a COUNT query)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
