"""Data models for restaurant seating."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import math

from .errors import InvalidArgument


def parse_positive_int(value: object, label: str = "value") -> int:
    """Parse a strictly positive integer.

    ``pandas`` hands back ``float('nan')`` for empty cells and floats such as
    ``4.0`` for integer columns with gaps; the latter are accepted, the former
    rejected. Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"{label} must be a positive integer, got {value!r}")
    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            raise InvalidArgument(f"{label} must be a positive integer, got {value!r}")
        value = int(value)
    try:
        number = value if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        raise InvalidArgument(f"{label} must be a positive integer, got {value!r}") from None
    if number <= 0:
        raise InvalidArgument(f"{label} must be a positive integer, got {value!r}")
    return number


def is_blank(value: object) -> bool:
    """True for ``None``, empty strings and pandas ``nan`` cells."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    text = str(value).strip()
    return not text or text.lower() == "nan"


class Table:
    """Dining table with a fixed number of seats.

    ``capacity`` is fixed at construction. ``free_seats`` is read-only from
    outside; only the seating manager moves it. Tables compare by identity,
    two tables of the same capacity are still different tables.
    """

    def __init__(self, capacity: int, name: str = "") -> None:
        self._capacity = parse_positive_int(capacity, "table capacity")
        self._free_seats = self._capacity
        self.name = name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def free_seats(self) -> int:
        return self._free_seats

    @property
    def occupied(self) -> int:
        return self._capacity - self._free_seats

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        return f"Table({label}, {self._free_seats}/{self._capacity} free)"


class CustomerGroup:
    """Party of customers asking to be seated together.

    ``size`` is fixed at construction and ``table`` is written only by the
    seating manager.
    """

    def __init__(self, size: int, name: str = "") -> None:
        self._size = parse_positive_int(size, "group size")
        self._table: Optional[Table] = None
        self.name = name

    @property
    def size(self) -> int:
        return self._size

    @property
    def table(self) -> Optional[Table]:
        return self._table

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        where = (self._table.name or "table") if self._table is not None else "unseated"
        return f"CustomerGroup({label}, size={self._size}, {where})"


EVENT_ARRIVE = "arrive"
EVENT_LEAVE = "leave"


@dataclass
class SeatingEvent:
    """One step of an arrival/departure script."""

    action: str
    group: CustomerGroup
