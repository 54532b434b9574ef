"""Unit tests for cursor encoding and decoding."""
from __future__ import annotations

import base64
from datetime import UTC, date, datetime, time
from decimal import Decimal
from uuid import UUID

import pytest

from keyset_pagination.core.exceptions import InvalidCursorError, OrderingMismatchError
from keyset_pagination.core.pagination.cursor import CursorCodec


def _token(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


class TestCursorCodecRoundTrip:
    """decode(encode(t)) == t for every supported value kind."""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            0,
            -17,
            3.25,
            True,
            False,
            "",
            "plain string",
            "2025-01-15T10:30:00",
            "(date)2025-01-15",
            "unicode ✓ and.dots",
            {"nested": [1, "two", None]},
            [1, 2, 3],
            datetime(2025, 1, 15, 10, 30, 0),
            datetime(2025, 1, 15, 10, 30, 0, 123456, tzinfo=UTC),
            date(2024, 2, 29),
            time(23, 59, 58),
            Decimal("12.3400"),
            UUID("550e8400-e29b-41d4-a716-446655440000"),
        ],
        ids=repr,
    )
    def test_single_value_round_trip(self, value):
        """A one-value tuple should come back equal and with the same type."""
        decoded = CursorCodec.decode(CursorCodec.encode((value,)), arity=1)

        assert decoded == (value,)
        assert type(decoded[0]) is type(value)

    def test_multi_value_round_trip(self):
        """Mixed tuples should round-trip position by position."""
        values = (datetime(2025, 1, 1, 12, 0), "abc", 42, None, date(2025, 1, 2))

        assert CursorCodec.decode(CursorCodec.encode(values), arity=5) == values

    def test_date_string_stays_string(self):
        """A string that looks like a date must not come back as a date."""
        decoded = CursorCodec.decode(CursorCodec.encode(("2025-01-15",)), arity=1)

        assert decoded == ("2025-01-15",)
        assert isinstance(decoded[0], str)


class TestCursorCodecFormat:
    """Tests for the wire format."""

    def test_absent_tuple_encodes_to_empty_string(self):
        assert CursorCodec.encode(None) == ""

    @pytest.mark.parametrize("cursor", ["", None])
    def test_empty_cursor_decodes_to_no_boundary(self, cursor):
        assert CursorCodec.decode(cursor, arity=2) is None

    def test_tuple_of_nulls_is_not_empty(self):
        """(None,) is a real boundary, distinct from no boundary."""
        cursor = CursorCodec.encode((None,))

        assert cursor != ""
        assert CursorCodec.decode(cursor, arity=1) == (None,)

    def test_cursor_is_url_safe(self):
        cursor = CursorCodec.encode(("???>>>", "a/b+c", datetime(2025, 1, 1)))

        assert set(cursor) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.")
        assert "=" not in cursor

    def test_values_are_dot_delimited(self):
        cursor = CursorCodec.encode((1, 2, 3))

        assert cursor.split(".") == [_token("1"), _token("2"), _token("3")]

    def test_datetime_is_tagged(self):
        cursor = CursorCodec.encode((datetime(2025, 1, 15, 10, 30),))

        assert cursor == "KGRhdGV0aW1lKTIwMjUtMDEtMTVUMTA6MzA6MDA"

    def test_unsupported_value_raises_type_error(self):
        with pytest.raises(TypeError):
            CursorCodec.encode((object(),))


class TestCursorCodecErrors:
    """Malformed cursors must fail loudly, never yield a wrong page."""

    def test_arity_mismatch_raises_ordering_mismatch(self):
        cursor = CursorCodec.encode((1, 2))

        with pytest.raises(OrderingMismatchError) as exc_info:
            CursorCodec.decode(cursor, arity=3)

        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2
        assert isinstance(exc_info.value, InvalidCursorError)

    @pytest.mark.parametrize(
        "cursor",
        [
            "not-valid-base64!!!",
            "abc=",
            "A",
            ".",
            _token("(unknown)value"),
            _token("{not json"),
            _token("(date)not-a-date"),
            _token("(decimal)abc"),
            _token("(uuid)1234"),
            base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode().rstrip("="),
        ],
    )
    def test_malformed_token_raises_invalid_cursor(self, cursor):
        arity = len(cursor.split("."))

        with pytest.raises(InvalidCursorError) as exc_info:
            CursorCodec.decode(cursor, arity=arity)

        assert exc_info.value.status_code == 400

    def test_unknown_tag_reports_tag(self):
        with pytest.raises(InvalidCursorError) as exc_info:
            CursorCodec.decode(_token("(money)12"), arity=1)

        assert exc_info.value.extra["tag"] == "money"
        assert exc_info.value.type == "invalid-cursor"
