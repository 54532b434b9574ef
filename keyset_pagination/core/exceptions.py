"""Custom exception classes for pagination."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class PaginationError(AppException):
    """Base class for errors raised while building or running a page request."""


class InvalidCursorError(PaginationError):
    """A cursor could not be decoded against the active ordering.

    Raised for bad token structure, undecodable base64, unknown type tags
    and unparsable payloads. Never retried; callers surface it as a 400.

    Example:
            raise InvalidCursorError(
            detail="Cursor token 1 is not valid base64url",
            extra={"cursor": "abc$"}
        )
    """

    def __init__(
        self,
        detail: str = "Invalid cursor",
        type: str = "invalid-cursor",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Invalid Cursor",
            instance=instance,
            extra=extra,
        )


class OrderingMismatchError(InvalidCursorError):
    """Cursor was produced under a different ordering than the one in effect.

    Detected by arity: a cursor carries one value per ordering rule.

    Attributes:
        expected: Number of rules in the active ordering.
        actual: Number of values carried by the cursor.
    """

    def __init__(self, expected: int, actual: int, instance: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            detail=f"Cursor carries {actual} value(s) but the ordering has {expected} rule(s)",
            type="ordering-mismatch",
            instance=instance,
            extra={"expected_arity": expected, "actual_arity": actual},
        )


__all__ = [
    "AppException",
    "InvalidCursorError",
    "OrderingMismatchError",
    "PaginationError",
]
