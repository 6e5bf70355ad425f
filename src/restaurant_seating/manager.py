"""
Seating manager: seats arriving groups, queues the rest, backfills on departure.

Tables are kept sorted by descending free seats, so the first table always has
the most room. An arriving group either fits there or fits nowhere, in which
case it joins the tail of the waiting queue. When a group leaves, the waiting
queue is scanned in arrival order and every group that fits the freed table is
seated there; the scan does not stop at the first group that is too large.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import InvalidState, Unseatable
from .models import CustomerGroup, Table

logger = logging.getLogger(__name__)


# ----------------------------- stats helpers -----------------------------
def compute_table_stats(tables: Iterable[Table]) -> List[Dict[str, int | float | str]]:
    """Per table capacity, occupancy and utilization, in the given order."""
    stats = []
    for t in tables:
        occupied = t.capacity - t.free_seats
        stats.append({
            "table": t.name,
            "capacity": t.capacity,
            "occupied": occupied,
            "free_seats": t.free_seats,
            "utilization": occupied / t.capacity if t.capacity else 0.0,
        })
    return stats


def summarize(manager: "SeatingManager") -> Dict[str, int | float]:
    """Room wide totals: seats, occupancy, seated and waiting groups."""
    tables = manager.tables
    waiting = manager.waiting
    capacity = sum(t.capacity for t in tables)
    occupied = sum(t.capacity - t.free_seats for t in tables)
    seated = manager.seated_groups()
    return {
        "tables": len(tables),
        "capacity": capacity,
        "occupied": occupied,
        "free_seats": capacity - occupied,
        "utilization": occupied / capacity if capacity else 0.0,
        "seated_groups": sum(len(groups) for groups in seated.values()),
        "waiting_groups": len(waiting),
        "waiting_seats": sum(g.size for g in waiting),
    }


# ----------------------------- manager -----------------------------
class SeatingManager:
    """Assigns customer groups to tables and keeps a FIFO waiting queue."""

    def __init__(
        self,
        tables: Sequence[Union[Table, int]],
        reject_unseatable: bool = False,
    ) -> None:
        self._tables: List[Table] = []
        for i, t in enumerate(tables, start=1):
            if not isinstance(t, Table):
                t = Table(capacity=t)
            if not t.name:
                t.name = f"T{i}"
            t._free_seats = t.capacity
            self._tables.append(t)
        self._waiting: List[CustomerGroup] = []
        # Every group this manager currently seats; the manager is the only
        # writer of ``CustomerGroup.table``.
        self._seated: Dict[int, CustomerGroup] = {}
        self.reject_unseatable = reject_unseatable
        self._max_capacity = max((t.capacity for t in self._tables), default=0)
        self._lock = threading.RLock()
        self._sort_tables()
        logger.debug("Seating manager ready with %d tables, %d seats",
                     len(self._tables), sum(t.capacity for t in self._tables))

    # ----------------------------- internals -----------------------------
    def _sort_tables(self) -> None:
        # list.sort is stable with reverse=True, ties keep their order
        self._tables.sort(key=lambda t: t.free_seats, reverse=True)

    def _seat(self, group: CustomerGroup, table: Table, size: int) -> None:
        remaining = table.free_seats - size
        if remaining < 0:
            raise InvalidState(f"{table!r} has no room for {group!r}")
        table._free_seats = remaining
        group._table = table
        self._seated[id(group)] = group
        logger.debug("Seated %r at %r", group, table)

    def _is_waiting(self, group: CustomerGroup) -> bool:
        return any(g is group for g in self._waiting)

    def _backfill(self, table: Table) -> List[CustomerGroup]:
        """Seat waiting groups that fit ``table`` in arrival order."""
        seated: List[CustomerGroup] = []
        still_waiting: List[CustomerGroup] = []
        for waiting_group in self._waiting:
            if table.free_seats >= waiting_group.size:
                self._seat(waiting_group, table, waiting_group.size)
                seated.append(waiting_group)
            else:
                still_waiting.append(waiting_group)
        self._waiting = still_waiting
        return seated

    # ----------------------------- operations -----------------------------
    def arrives(self, group: CustomerGroup) -> bool:
        """Seat ``group`` at the table with most free seats or queue it.

        Returns True when the group was seated, False when it was queued.
        """
        size = group.size
        with self._lock:
            if group.table is not None or id(group) in self._seated:
                raise InvalidState(f"{group!r} is already seated")
            if self._is_waiting(group):
                raise InvalidState(f"{group!r} is already waiting")
            if self.reject_unseatable and size > self._max_capacity:
                raise Unseatable(
                    f"group of {size} exceeds the largest table ({self._max_capacity} seats)"
                )

            if self._tables and self._tables[0].free_seats >= size:
                self._seat(group, self._tables[0], size)
                self._sort_tables()
                return True

            self._waiting.append(group)
            logger.debug("Queued %r, %d waiting", group, len(self._waiting))
            return False

    def leaves(self, group: CustomerGroup) -> List[CustomerGroup]:
        """Free the seats held by ``group`` and backfill from the waiting queue.

        Returns the waiting groups seated at the freed table, in seating order.
        Raises InvalidState if ``group`` is not currently seated here.
        """
        with self._lock:
            table = group.table
            if table is None or self._seated.get(id(group)) is not group:
                raise InvalidState(f"{group!r} is not seated")

            table._free_seats += group.size
            group._table = None
            del self._seated[id(group)]
            logger.debug("%r left %r", group, table)

            backfilled = self._backfill(table) if self._waiting else []
            if backfilled:
                logger.debug("Backfilled %d groups at %r", len(backfilled), table)
            self._sort_tables()
            return backfilled

    def locate(self, group: CustomerGroup) -> Optional[Table]:
        """Return the table ``group`` sits at, or None while unseated."""
        with self._lock:
            return group.table

    # ----------------------------- introspection -----------------------------
    @property
    def tables(self) -> Tuple[Table, ...]:
        """Tables in current order, most free seats first."""
        with self._lock:
            return tuple(self._tables)

    @property
    def waiting(self) -> Tuple[CustomerGroup, ...]:
        """Waiting queue in arrival order."""
        with self._lock:
            return tuple(self._waiting)

    def is_waiting(self, group: CustomerGroup) -> bool:
        with self._lock:
            return self._is_waiting(group)

    def seated_groups(self) -> Dict[Table, List[CustomerGroup]]:
        """Currently seated groups keyed by table, in seating order."""
        with self._lock:
            by_table: Dict[Table, List[CustomerGroup]] = {}
            for g in self._seated.values():
                by_table.setdefault(g.table, []).append(g)
            return by_table
