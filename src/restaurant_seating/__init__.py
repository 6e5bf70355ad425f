"""Restaurant seating package."""
from .errors import SeatingError, InvalidState, InvalidArgument, Unseatable
from .models import Table, CustomerGroup, SeatingEvent
from .csv_loader import (
    load_tables,
    load_events,
    load_all,
)
from .manager import SeatingManager, compute_table_stats, summarize

__all__ = [
    "SeatingError",
    "InvalidState",
    "InvalidArgument",
    "Unseatable",
    "Table",
    "CustomerGroup",
    "SeatingEvent",
    "load_tables",
    "load_events",
    "load_all",
    "SeatingManager",
    "compute_table_stats",
    "summarize",
]
