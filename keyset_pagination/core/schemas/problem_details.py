"""Error body for rejected pagination requests (RFC 7807)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProblemDetails(BaseModel):
    """Problem document returned when a page request fails.

    ``type`` carries the pagination error kind (``invalid-cursor`` or
    ``ordering-mismatch``); error-specific context such as the expected and
    actual cursor arity is merged in next to these fields by the handler.
    """

    type: str = Field(default="about:blank", min_length=1, description="Pagination error kind")
    title: str = Field(min_length=1, description="Short summary, e.g. 'Invalid Cursor'")
    status: int = Field(ge=400, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="Why the cursor was rejected")
    instance: str | None = Field(default=None, description="Request URL that carried the cursor")


__all__ = ["ProblemDetails"]
