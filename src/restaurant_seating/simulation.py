"""Demo harness and event replay for the seating manager.

All randomness goes through an injected ``random.Random`` so runs are
reproducible from a seed.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .errors import SeatingError
from .manager import SeatingManager
from .models import EVENT_ARRIVE, CustomerGroup, SeatingEvent, Table

logger = logging.getLogger(__name__)

DEFAULT_NUM_TABLES = 10
DEFAULT_NUM_GROUPS = 7
# sizes are drawn from [MIN_SIZE, MAX_SIZE)
DEFAULT_MIN_SIZE = 2
DEFAULT_MAX_SIZE = 7


def random_tables(
    rng: random.Random,
    count: int = DEFAULT_NUM_TABLES,
    low: int = DEFAULT_MIN_SIZE,
    high: int = DEFAULT_MAX_SIZE,
) -> List[Table]:
    return [Table(capacity=rng.randrange(low, high), name=f"T{i}") for i in range(1, count + 1)]


def random_groups(
    rng: random.Random,
    count: int = DEFAULT_NUM_GROUPS,
    low: int = DEFAULT_MIN_SIZE,
    high: int = DEFAULT_MAX_SIZE,
) -> List[CustomerGroup]:
    return [CustomerGroup(size=rng.randrange(low, high), name=f"G{i}") for i in range(1, count + 1)]


@dataclass
class DemoResult:
    """Outcome of :func:`run_demo`."""

    manager: SeatingManager
    groups: List[CustomerGroup]
    departed: Optional[CustomerGroup] = None
    backfilled: List[CustomerGroup] = field(default_factory=list)
    located: Optional[Table] = None


def run_demo(
    rng: random.Random,
    num_tables: int = DEFAULT_NUM_TABLES,
    num_groups: int = DEFAULT_NUM_GROUPS,
    low: int = DEFAULT_MIN_SIZE,
    high: int = DEFAULT_MAX_SIZE,
    reject_unseatable: bool = False,
) -> DemoResult:
    """Seat random groups at random tables, send one home, then look one up.

    Every group arrives in order, the first seated group leaves (which may
    backfill waiting groups) and the second group is located.
    """
    manager = SeatingManager(random_tables(rng, num_tables, low, high),
                             reject_unseatable=reject_unseatable)
    groups = random_groups(rng, num_groups, low, high)
    for g in groups:
        manager.arrives(g)
    logger.info("Demo: %d groups arrived, %d waiting", len(groups), len(manager.waiting))

    result = DemoResult(manager=manager, groups=groups)
    departed = next((g for g in groups if manager.locate(g) is not None), None)
    if departed is not None:
        result.departed = departed
        result.backfilled = manager.leaves(departed)
        logger.info("Demo: %s left, %d backfilled", departed.name, len(result.backfilled))
    if len(groups) > 1:
        result.located = manager.locate(groups[1])
    return result


def replay(manager: SeatingManager, events: Iterable[SeatingEvent]) -> List[Dict[str, object]]:
    """Apply a scripted sequence of arrivals and departures.

    Returns one log row per event with the outcome (``seated``, ``queued``,
    ``left``) and the table name involved. Backfills triggered by a
    departure are logged as extra ``backfilled`` rows right after it.
    Seating errors propagate.
    """
    log: List[Dict[str, object]] = []
    for step, event in enumerate(events, start=1):
        group = event.group
        if event.action == EVENT_ARRIVE:
            seated = manager.arrives(group)
            table = manager.locate(group)
            log.append({
                "step": step,
                "event": event.action,
                "group": group.name,
                "size": group.size,
                "outcome": "seated" if seated else "queued",
                "table": table.name if table is not None else "",
            })
            continue

        table = manager.locate(group)
        try:
            backfilled = manager.leaves(group)
        except SeatingError:
            logger.error("Step %d: %s cannot leave, it is not seated", step, group.name)
            raise
        log.append({
            "step": step,
            "event": event.action,
            "group": group.name,
            "size": group.size,
            "outcome": "left",
            "table": table.name if table is not None else "",
        })
        for g in backfilled:
            log.append({
                "step": step,
                "event": event.action,
                "group": g.name,
                "size": g.size,
                "outcome": "backfilled",
                "table": g.table.name if g.table is not None else "",
            })
    return log
