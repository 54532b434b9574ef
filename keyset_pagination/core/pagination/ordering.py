"""Ordering specifications for keyset pagination.

An :class:`OrderingSpec` is the declared multi-column sort order of a query.
Each :class:`OrderingRule` knows three things:

- the SQL expression to ORDER BY (a column or a computed expression),
- the property path used to read the sort-key value from a fetched record,
- how to turn a boundary value into something comparable with that
  expression (``transform``), which matters for computed expressions.

Example:
    from sqlalchemy import func

    ordering = OrderingSpec(
        order_by_coalesce(Movie.title, "asc", coalesce_values=("",)),
        OrderingRule.of(Movie.released_at, "desc"),
        OrderingRule.of(Movie.id),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import ColumnElement, func, literal
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm.exc import UnmappedColumnError
from sqlalchemy.sql import visitors
from sqlalchemy.sql.elements import ColumnClause, Label

if TYPE_CHECKING:
    from keyset_pagination.core.pagination.cursor import KeysetTuple

type Direction = Literal["asc", "desc"]


def normalize_direction(direction: str) -> Direction:
    """Validate and lower-case a sort direction."""
    normalized = direction.lower() if isinstance(direction, str) else direction
    if normalized not in ("asc", "desc"):
        msg = f"direction must be 'asc' or 'desc', got {direction!r}"
        raise ValueError(msg)
    return normalized


def column_to_property(column: Any, model: type | None = None) -> str:
    """Resolve an ORDER BY column to the property path that exposes its value.

    Handles ORM attributes (``Movie.title``), labels, table columns whose
    database name differs from the mapped attribute name, and dotted strings
    (``"movies.title"`` resolves to ``"title"``).

    Args:
        column: Column reference.
        model: Mapped class used to translate table columns to attribute names.

    Raises:
        TypeError: If the expression has no natural property (computed
            expressions need an explicit ``prop``).
    """
    if isinstance(column, str):
        return column.rsplit(".", 1)[-1]

    # ORM instrumented attributes and their annotated columns
    proxy_key = getattr(column, "_annotations", {}).get("proxy_key")
    if proxy_key:
        return proxy_key
    if hasattr(column, "property") and hasattr(column, "key"):
        return column.key

    if isinstance(column, Label):
        return column.name

    if isinstance(column, ColumnClause):
        mapper = _mapper_for(column, model)
        if mapper is not None:
            try:
                return mapper.get_property_by_column(column).key
            except UnmappedColumnError:
                pass
        return column.key

    msg = f"Cannot derive a property from {column!r}; pass prop= explicitly"
    raise TypeError(msg)


def _mapper_for(column: ColumnClause[Any], model: type | None) -> Any:
    parent = getattr(column, "_annotations", {}).get("parentmapper")
    if parent is not None:
        return parent
    if model is None:
        return None
    try:
        return sa_inspect(model)
    except NoInspectionAvailable:
        return None


def read_property(record: Any, path: str) -> Any:
    """Read a dotted property path from a record.

    Segments are read as attributes, falling back to mapping lookups for JSON
    documents. A missing segment reads as None.
    """
    value = record
    for segment in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(segment)
        else:
            value = getattr(value, segment, None)
    return value


@dataclass(frozen=True, slots=True)
class OrderingRule:
    """One sort key.

    Attributes:
        column: Expression sent to ORDER BY and compared in the keyset predicate.
        direction: Declared sort direction.
        prop: Dotted property path read from records to build cursors.
        transform: Maps a raw boundary value to the expression compared against
            ``column``. Identity when None.
    """

    column: Any
    direction: Direction = "asc"
    prop: str = ""
    transform: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", normalize_direction(self.direction))
        if not self.prop:
            object.__setattr__(self, "prop", column_to_property(self.column))

    @classmethod
    def of(
        cls,
        column: Any,
        direction: str = "asc",
        *,
        prop: str | None = None,
        model: type | None = None,
    ) -> OrderingRule:
        """Rule for a plain column."""
        return cls(
            column=column,
            direction=direction,
            prop=prop or column_to_property(column, model),
        )

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"

    def flipped(self) -> OrderingRule:
        """The same rule sorted the other way."""
        return replace(self, direction="desc" if self.ascending else "asc")

    def value_of(self, record: Any) -> Any:
        """Extract this rule's sort-key value from a fetched record."""
        return read_property(record, self.prop)

    def comparison_value(self, value: Any) -> Any:
        """Expression compared against ``column`` for a boundary ``value``."""
        if self.transform is None:
            return value
        return self.transform(value)

    def order_clause(self) -> ColumnElement[Any]:
        return self.column.asc() if self.ascending else self.column.desc()


def order_by_coalesce(
    column: Any,
    direction: str = "asc",
    coalesce_values: Any = ("",),
    *,
    prop: str | None = None,
    model: type | None = None,
) -> OrderingRule:
    """Rule ordering by ``COALESCE(column, *coalesce_values)``.

    The boundary value is compared as ``COALESCE(:value, *coalesce_values)``
    so NULL rows sort and compare where the coalesced value puts them.
    """
    if not isinstance(coalesce_values, (list, tuple)):
        coalesce_values = (coalesce_values,)
    values = tuple(coalesce_values)
    column_type = getattr(column, "type", None)

    def transform(value: Any) -> ColumnElement[Any]:
        return func.coalesce(literal(value, type_=column_type), *values)

    return OrderingRule(
        column=func.coalesce(column, *values),
        direction=direction,
        prop=prop or column_to_property(column, model),
        transform=transform,
    )


def order_by_explicit(
    expression: ColumnElement[Any],
    direction: str = "asc",
    compare_value: Callable[[Any], Any] | str | None = None,
    prop: str | None = None,
    *,
    model: type | None = None,
) -> OrderingRule:
    """Rule ordering by an arbitrary computed expression.

    Without ``compare_value`` the boundary is compared against the same
    expression with its first column reference replaced by the bound value,
    and ``prop`` defaults to that column's property. A string
    ``compare_value`` is taken as ``prop``.

    Example:
        order_by_explicit(func.coalesce(Movie.title, ""), "desc")
        order_by_explicit(func.lower(Movie.title), compare_value=func.lower, prop="title")
    """
    if isinstance(compare_value, str):
        prop, compare_value = compare_value, None

    transform = compare_value
    if transform is None:
        target = first_column(expression)
        if target is None:
            msg = "expression has no column reference; pass compare_value="
            raise ValueError(msg)

        def transform(value: Any) -> ColumnElement[Any]:
            return substitute_column(expression, target, value)

        prop = prop or column_to_property(target, model)
    elif not prop:
        msg = "prop= is required when compare_value is a callable"
        raise ValueError(msg)

    return OrderingRule(
        column=expression,
        direction=direction,
        prop=prop,
        transform=transform,
    )


def first_column(expression: ColumnElement[Any]) -> ColumnClause[Any] | None:
    """First column reference found walking ``expression`` breadth-first."""
    for element in visitors.iterate(expression):
        if isinstance(element, ColumnClause) and not element.is_literal:
            return element
    return None


def substitute_column(
    expression: ColumnElement[Any],
    target: ColumnClause[Any],
    value: Any,
) -> ColumnElement[Any]:
    """Copy of ``expression`` with ``target`` replaced by a bound ``value``."""

    def replace_target(element: Any) -> Any:
        if element is target:
            return literal(value, type_=target.type)
        return None

    return visitors.replacement_traverse(expression, {}, replace_target)


class OrderingSpec(Sequence[OrderingRule]):
    """Ordered, immutable list of :class:`OrderingRule`.

    Accepts rules or bare columns (treated as ascending plain rules).
    """

    __slots__ = ("_rules",)

    def __init__(self, *rules: OrderingRule | Any) -> None:
        if not rules:
            msg = "an ordering needs at least one rule"
            raise ValueError(msg)
        self._rules: tuple[OrderingRule, ...] = tuple(
            rule if isinstance(rule, OrderingRule) else OrderingRule.of(rule) for rule in rules
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[tuple[Any, str]],
        *,
        model: type | None = None,
    ) -> OrderingSpec:
        """Build from ``[(column, "asc" | "desc"), ...]``."""
        return cls(*(OrderingRule.of(column, direction, model=model) for column, direction in pairs))

    def __getitem__(self, index: Any) -> Any:
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        rules = ", ".join(f"{rule.prop} {rule.direction}" for rule in self._rules)
        return f"OrderingSpec({rules})"

    @property
    def arity(self) -> int:
        return len(self._rules)

    def for_direction(self, backward: bool) -> tuple[OrderingRule, ...]:
        """Rules adjusted for traversal; every direction flips when going backward."""
        if not backward:
            return self._rules
        return tuple(rule.flipped() for rule in self._rules)

    def extract(self, record: Any) -> KeysetTuple:
        """Sort-key tuple of ``record``."""
        return tuple(rule.value_of(record) for rule in self._rules)


__all__ = [
    "Direction",
    "OrderingRule",
    "OrderingSpec",
    "column_to_property",
    "first_column",
    "normalize_direction",
    "order_by_coalesce",
    "order_by_explicit",
    "read_property",
    "substitute_column",
]
