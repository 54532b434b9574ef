"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode the sort-key values of one row,
allowing the next query to seek directly to that position.

The cursor format is:
1. Each sort-key value is serialized on its own: JSON for plain scalars,
   ``(<tag>)<text>`` for values whose JSON form would lose their type
   (datetimes, dates, decimals, UUIDs).
2. Every serialized value is base64url encoded without padding.
3. The tokens are joined with ``.``, which base64url never produces.

Example, for ``(datetime(2025, 1, 15, 10, 30), 42)``:
    (datetime)2025-01-15T10:30:00  ->  KGRhdGV0aW1lKTIwMjUtMDEtMTVUMTA6MzA6MDA
    42                             ->  NDI
    cursor                         ->  KGRhdGV0aW1lKTIwMjUtMDEtMTVUMTA6MzA6MDA.NDI

An absent boundary (no previous page) encodes to the empty string, which is
distinct from a tuple of nulls.
"""

from __future__ import annotations

import base64
import json
import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar
from uuid import UUID

from keyset_pagination.core.exceptions import InvalidCursorError, OrderingMismatchError

type KeysetTuple = tuple[Any, ...]

DELIMITER = "."

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_TAG_RE = re.compile(r"^\(([a-z]+)\)(.*)$", re.DOTALL)


class TypeSerializer(ABC):
    """Round-trips one Python type through a tagged string."""

    tag: ClassVar[str]

    @abstractmethod
    def matches(self, value: Any) -> bool: ...

    @abstractmethod
    def serialize(self, value: Any) -> str: ...

    @abstractmethod
    def deserialize(self, text: str) -> Any: ...


class DateTimeSerializer(TypeSerializer):
    tag = "datetime"

    def matches(self, value: Any) -> bool:
        return isinstance(value, datetime)

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def deserialize(self, text: str) -> datetime:
        return datetime.fromisoformat(text)


class DateSerializer(TypeSerializer):
    tag = "date"

    def matches(self, value: Any) -> bool:
        # datetime is a date subclass and has its own serializer
        return isinstance(value, date) and not isinstance(value, datetime)

    def serialize(self, value: date) -> str:
        return value.isoformat()

    def deserialize(self, text: str) -> date:
        return date.fromisoformat(text)


class TimeSerializer(TypeSerializer):
    tag = "time"

    def matches(self, value: Any) -> bool:
        return isinstance(value, time)

    def serialize(self, value: time) -> str:
        return value.isoformat()

    def deserialize(self, text: str) -> time:
        return time.fromisoformat(text)


class DecimalSerializer(TypeSerializer):
    tag = "decimal"

    def matches(self, value: Any) -> bool:
        return isinstance(value, Decimal)

    def serialize(self, value: Decimal) -> str:
        return str(value)

    def deserialize(self, text: str) -> Decimal:
        return Decimal(text)


class UUIDSerializer(TypeSerializer):
    tag = "uuid"

    def matches(self, value: Any) -> bool:
        return isinstance(value, UUID)

    def serialize(self, value: UUID) -> str:
        return str(value)

    def deserialize(self, text: str) -> UUID:
        return UUID(text)


class CursorCodec:
    """Encode and decode pagination cursors.

    Subclass and extend ``serializers`` to support additional value types.

    Usage:
        cursor = CursorCodec.encode((datetime.now(), 42))
        values = CursorCodec.decode(cursor, arity=2)
    """

    serializers: ClassVar[tuple[TypeSerializer, ...]] = (
        DateTimeSerializer(),
        DateSerializer(),
        TimeSerializer(),
        DecimalSerializer(),
        UUIDSerializer(),
    )

    @classmethod
    def encode(cls, values: KeysetTuple | None) -> str:
        """Encode a keyset tuple to an opaque string.

        Args:
            values: Sort-key values of one row, or None for "no boundary".

        Returns:
            URL-safe cursor string; empty when ``values`` is None.

        Raises:
            TypeError: If a value is neither tagged nor JSON serializable.
        """
        if values is None:
            return ""
        return DELIMITER.join(_b64encode(cls.serialize_value(value)) for value in values)

    @classmethod
    def decode(cls, cursor: str | None, arity: int) -> KeysetTuple | None:
        """Decode a cursor string against an ordering of ``arity`` rules.

        Args:
            cursor: Cursor previously produced by :meth:`encode`.
            arity: Number of rules in the active ordering.

        Returns:
            The keyset tuple, or None for an empty/absent cursor.

        Raises:
            OrderingMismatchError: If the cursor carries a different number of values.
            InvalidCursorError: If any token is malformed.
        """
        if not cursor:
            return None

        tokens = cursor.split(DELIMITER)
        if len(tokens) != arity:
            raise OrderingMismatchError(expected=arity, actual=len(tokens))

        values = []
        for position, token in enumerate(tokens):
            if not _TOKEN_RE.match(token):
                raise InvalidCursorError(
                    detail=f"Cursor token {position} is not valid base64url",
                    extra={"position": position},
                )
            try:
                values.append(cls.deserialize_value(_b64decode(token)))
            except (ValueError, InvalidOperation) as e:
                raise InvalidCursorError(
                    detail=f"Cursor token {position} could not be decoded: {e}",
                    extra={"position": position},
                ) from e
        return tuple(values)

    @classmethod
    def serialize_value(cls, value: Any) -> str:
        """Serialize one value, tagging it when JSON would lose its type."""
        for serializer in cls.serializers:
            if serializer.matches(value):
                return f"({serializer.tag}){serializer.serialize(value)}"
        return json.dumps(value, separators=(",", ":"))

    @classmethod
    def deserialize_value(cls, text: str) -> Any:
        """Reverse :meth:`serialize_value`."""
        match = _TAG_RE.match(text)
        if match is None:
            return json.loads(text)

        tag, payload = match.groups()
        for serializer in cls.serializers:
            if serializer.tag == tag:
                return serializer.deserialize(payload)
        raise InvalidCursorError(detail=f"Unknown cursor value type {tag!r}", extra={"tag": tag})


def _b64encode(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


def _b64decode(token: str) -> str:
    padded = token + "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(padded.encode()).decode()


__all__ = [
    "DELIMITER",
    "CursorCodec",
    "DateSerializer",
    "DateTimeSerializer",
    "DecimalSerializer",
    "KeysetTuple",
    "TimeSerializer",
    "TypeSerializer",
    "UUIDSerializer",
]
