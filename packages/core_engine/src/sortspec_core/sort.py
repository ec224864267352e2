"""Sort specification model: directions, orders and ordered sort lists."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union


class Direction(Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def is_ascending(self) -> bool:
        return self is Direction.ASC

    @property
    def is_descending(self) -> bool:
        return self is Direction.DESC

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Parse ``asc``/``desc`` (or ``ascending``/``descending``), ignoring case."""
        normalized = (value or "").strip().lower()
        if normalized in ("asc", "ascending"):
            return cls.ASC
        if normalized in ("desc", "descending"):
            return cls.DESC
        raise ValueError(
            f"Invalid value '{value}' for sort direction. Has to be either 'asc' or 'desc' (case insensitive)."
        )

    @classmethod
    def from_optional_string(cls, value: Optional[str]) -> Optional["Direction"]:
        try:
            return cls.from_string(value or "")
        except ValueError:
            return None


DEFAULT_DIRECTION = Direction.ASC


@dataclass(frozen=True)
class Order:
    """A single sort key: a dotted property path plus a direction."""

    property: str
    direction: Direction = DEFAULT_DIRECTION
    ignore_case: bool = False

    @classmethod
    def asc(cls, property: str) -> "Order":
        return cls(property, Direction.ASC)

    @classmethod
    def desc(cls, property: str) -> "Order":
        return cls(property, Direction.DESC)

    @property
    def is_ascending(self) -> bool:
        return self.direction.is_ascending

    @property
    def is_descending(self) -> bool:
        return self.direction.is_descending

    def with_direction(self, direction: Direction) -> "Order":
        return replace(self, direction=direction)

    def with_property(self, property: str) -> "Order":
        return replace(self, property=property)

    def reverse(self) -> "Order":
        return self.with_direction(Direction.DESC if self.is_ascending else Direction.ASC)

    def ignoring_case(self) -> "Order":
        return replace(self, ignore_case=True)

    def __str__(self) -> str:
        text = f"{self.property}: {self.direction.name}"
        return f"{text}, ignoring case" if self.ignore_case else text


class Sort:
    """Ordered, immutable list of :class:`Order` entries.

    Earlier orders take precedence; later ones only break ties. An empty
    ``Sort`` means "unsorted" and compares every pair of entities as equal.
    """

    __slots__ = ("_orders",)

    def __init__(self, orders: Iterable[Order] = ()):
        self._orders: Tuple[Order, ...] = tuple(orders)

    @classmethod
    def by(cls, *properties: str, direction: Direction = DEFAULT_DIRECTION) -> "Sort":
        return cls(Order(prop, direction) for prop in properties)

    @classmethod
    def by_orders(cls, *orders: Order) -> "Sort":
        return cls(orders)

    @classmethod
    def unsorted(cls) -> "Sort":
        return _UNSORTED

    @property
    def orders(self) -> Tuple[Order, ...]:
        return self._orders

    @property
    def is_sorted(self) -> bool:
        return bool(self._orders)

    @property
    def is_unsorted(self) -> bool:
        return not self._orders

    def and_(self, other: Union["Sort", Iterable[Order]]) -> "Sort":
        return Sort(list(self._orders) + list(other))

    def ascending(self) -> "Sort":
        return Sort(order.with_direction(Direction.ASC) for order in self._orders)

    def descending(self) -> "Sort":
        return Sort(order.with_direction(Direction.DESC) for order in self._orders)

    def reverse(self) -> "Sort":
        return Sort(order.reverse() for order in self._orders)

    def get_order_for(self, property: str) -> Optional[Order]:
        for order in self._orders:
            if order.property == property:
                return order
        return None

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders)

    def __len__(self) -> int:
        return len(self._orders)

    def __bool__(self) -> bool:
        return bool(self._orders)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sort):
            return NotImplemented
        return self._orders == other._orders

    def __hash__(self) -> int:
        return hash(self._orders)

    def __repr__(self) -> str:
        return f"Sort({list(self._orders)!r})"

    def __str__(self) -> str:
        if not self._orders:
            return "UNSORTED"
        return ",".join(str(order) for order in self._orders)


_UNSORTED = Sort()

_PROPERTY_DIRECTION_RE = re.compile(r"^\s*(-?)([^:\s]+?)\s*(?::\s*(\w+))?\s*$")


def _parse_expression(expression: str) -> List[Order]:
    """Parse ``name,desc`` / ``a,b,asc`` / ``name:desc`` / ``-name``."""
    parts = [part.strip() for part in expression.split(",") if part.strip()]
    if not parts:
        return []

    trailing = Direction.from_optional_string(parts[-1]) if len(parts) > 1 else None
    if trailing is not None:
        parts = parts[:-1]

    orders: List[Order] = []
    for part in parts:
        match = _PROPERTY_DIRECTION_RE.match(part)
        if not match:
            raise ValueError(f"Invalid sort expression: '{part}'")
        negated, prop, suffix = match.groups()
        if suffix:
            direction = Direction.from_string(suffix)
        elif trailing is not None:
            direction = trailing
        elif negated:
            direction = Direction.DESC
        else:
            direction = DEFAULT_DIRECTION
        orders.append(Order(prop, direction))
    return orders


def parse_sort(expressions: Union[str, Sequence[str], None]) -> Sort:
    """Build a Sort from request-parameter style expressions.

    Each expression is either ``prop[,prop...][,asc|desc]``, ``prop:desc`` or
    ``-prop``. Multiple expressions are concatenated in the order given.
    """
    if expressions is None:
        return Sort.unsorted()
    if isinstance(expressions, str):
        expressions = [expressions]

    orders: List[Order] = []
    for expression in expressions:
        orders.extend(_parse_expression(expression))
    return Sort(orders) if orders else Sort.unsorted()
