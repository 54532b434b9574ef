"""Keyset predicate construction.

Turns "rows strictly after this boundary under this multi-column order" into
a boolean expression. The tree is built first as plain immutable nodes and
then compiled to SQLAlchemy in a single pass, which keeps the recursion free
of any shared builder state and makes the shape easy to assert in tests.

For rules ``(a ASC, b DESC, c ASC)`` and boundary ``(1, 2, 3)``::

    a > 1
    OR (a = 1 AND (
        b < 2
        OR (a = 1 AND b = 2 AND c > 3)))

Backward traversal passes rules whose directions are already flipped, so the
same construction selects rows strictly *before* the boundary.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import and_, false, or_

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from keyset_pagination.core.pagination.cursor import KeysetTuple
    from keyset_pagination.core.pagination.ordering import OrderingRule

_OPERATORS = {">": operator.gt, "<": operator.lt}


class Predicate(ABC):
    """Node of a keyset predicate tree."""

    __slots__ = ()

    @abstractmethod
    def to_clause(self) -> ColumnElement[bool]:
        """Compile this node to a SQLAlchemy boolean expression."""
        ...


@dataclass(frozen=True, slots=True)
class Compare(Predicate):
    column: Any
    op: Literal[">", "<"]
    value: Any

    def to_clause(self) -> ColumnElement[bool]:
        return _OPERATORS[self.op](self.column, self.value)


@dataclass(frozen=True, slots=True)
class Equals(Predicate):
    column: Any
    value: Any

    def to_clause(self) -> ColumnElement[bool]:
        # None compiles to IS NULL, matching the engine's own null equality
        return self.column == self.value


@dataclass(frozen=True, slots=True)
class And(Predicate):
    terms: tuple[Predicate, ...]

    def to_clause(self) -> ColumnElement[bool]:
        return and_(*(term.to_clause() for term in self.terms))


@dataclass(frozen=True, slots=True)
class Or(Predicate):
    terms: tuple[Predicate, ...]

    def to_clause(self) -> ColumnElement[bool]:
        return or_(*(term.to_clause() for term in self.terms))


@dataclass(frozen=True, slots=True)
class Never(Predicate):
    """Always-false filter marking "nothing further in this direction"."""

    def to_clause(self) -> ColumnElement[bool]:
        return false()


def comparison_operator(rule: OrderingRule) -> Literal[">", "<"]:
    return ">" if rule.ascending else "<"


def build_keyset_predicate(
    rules: Sequence[OrderingRule],
    boundary: KeysetTuple | None,
) -> Predicate | None:
    """Build the keyset filter for ``boundary`` under ``rules``.

    Args:
        rules: Direction-adjusted rules for the traversal.
        boundary: Decoded sort-key tuple, or None for the first page.

    Returns:
        The predicate tree, or None when no filter applies.

    Raises:
        ValueError: If the boundary arity differs from the rule count.
    """
    if boundary is None:
        return None

    if len(boundary) != len(rules):
        msg = f"boundary has {len(boundary)} value(s) for {len(rules)} rule(s)"
        raise ValueError(msg)

    # A transformed rule compares NULL like any other value
    if not rules or (len(rules) == 1 and boundary[0] is None and rules[0].transform is None):
        return Never()

    values = tuple(rule.comparison_value(value) for rule, value in zip(rules, boundary, strict=True))
    return _match(rules, values, 0)


def _match(rules: Sequence[OrderingRule], values: tuple[Any, ...], index: int) -> Predicate:
    rule = rules[index]
    head = Compare(rule.column, comparison_operator(rule), values[index])
    if index == len(rules) - 1:
        return head

    equal_prefix = tuple(Equals(rules[j].column, values[j]) for j in range(index + 1))
    return Or((head, And((*equal_prefix, _match(rules, values, index + 1)))))


__all__ = [
    "And",
    "Compare",
    "Equals",
    "Never",
    "Or",
    "Predicate",
    "build_keyset_predicate",
    "comparison_operator",
]
