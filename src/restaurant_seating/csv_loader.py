"""CSV loading utilities."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Dict, List, Tuple

import pandas as pd

from .models import (
    EVENT_ARRIVE,
    EVENT_LEAVE,
    CustomerGroup,
    SeatingEvent,
    Table,
    is_blank,
    parse_positive_int,
)

logger = logging.getLogger(__name__)


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label} is missing columns: {', '.join(missing)}")


def load_tables(path: Path | str | IO[Any]) -> List[Table]:
    """Load table definitions from ``tables.csv``.

    ``capacity`` is required. ``name`` is optional and defaults to ``T<n>``
    with ``n`` the 1-based row number.
    """
    df = pd.read_csv(path)
    _require_columns(df, ["capacity"], "tables file")
    tables: List[Table] = []
    for i, (_, row) in enumerate(df.iterrows(), start=1):
        name = row.get("name", "")
        capacity = parse_positive_int(row["capacity"], f"capacity on row {i}")
        tables.append(Table(capacity=capacity, name=f"T{i}" if is_blank(name) else str(name).strip()))
    logger.debug("Loaded %d tables", len(tables))
    return tables


def load_events(path: Path | str | IO[Any]) -> List[SeatingEvent]:
    """Load an arrival/departure script from ``events.csv``.

    Columns: ``event`` (``arrive`` or ``leave``), ``group`` and ``size``.
    Every row naming the same group refers to the same ``CustomerGroup``, so a
    group may arrive again after leaving. ``size`` may be left blank on a
    ``leave`` row or on a repeated arrival.
    """
    df = pd.read_csv(path)
    _require_columns(df, ["event", "group"], "events file")
    groups: Dict[str, CustomerGroup] = {}
    events: List[SeatingEvent] = []
    for i, (_, row) in enumerate(df.iterrows(), start=1):
        action = str(row["event"]).strip().lower()
        if action not in (EVENT_ARRIVE, EVENT_LEAVE):
            raise ValueError(f"Unknown event on row {i}: {row['event']}")
        if is_blank(row["group"]):
            raise ValueError(f"Missing group name on row {i}")
        name = str(row["group"]).strip()
        size_val = row.get("size")

        group = groups.get(name)
        if group is None:
            if action == EVENT_LEAVE:
                raise ValueError(f"Group {name} leaves on row {i} before arriving")
            size = parse_positive_int(size_val, f"size of group {name} on row {i}")
            group = CustomerGroup(size=size, name=name)
            groups[name] = group
        elif not is_blank(size_val):
            size = parse_positive_int(size_val, f"size of group {name} on row {i}")
            if size != group.size:
                raise ValueError(
                    f"Group {name} has size {size} on row {i} but {group.size} earlier"
                )
        events.append(SeatingEvent(action=action, group=group))
    logger.debug("Loaded %d events for %d groups", len(events), len(groups))
    return events


def load_all(tables_path: Path | str, events_path: Path | str) -> Tuple[List[Table], List[SeatingEvent]]:
    """Convenience wrapper returning tables and events."""
    return load_tables(tables_path), load_events(events_path)
