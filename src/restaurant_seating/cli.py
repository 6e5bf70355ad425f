"""Command line interface for restaurant seating."""
from __future__ import annotations

import argparse
import csv
import logging
import random
from pathlib import Path
from typing import Dict, List, Sequence

from .csv_loader import load_events, load_tables
from .manager import SeatingManager, compute_table_stats, summarize
from .simulation import (
    DEFAULT_MAX_SIZE,
    DEFAULT_MIN_SIZE,
    DEFAULT_NUM_GROUPS,
    DEFAULT_NUM_TABLES,
    replay,
    run_demo,
)

LOG_FIELDS = ["step", "event", "group", "size", "outcome", "table"]
REPORT_FIELDS = ["table", "capacity", "occupied", "free_seats", "utilization", "groups"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Restaurant seating manager")
    parser.add_argument("--tables", type=Path, help="Path to tables.csv (name,capacity).")
    parser.add_argument("--events", type=Path,
                        help="Path to events.csv (event,group,size). Requires --tables.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random demo when no CSV scenario is given.")
    parser.add_argument("--num-tables", type=int, default=DEFAULT_NUM_TABLES)
    parser.add_argument("--num-groups", type=int, default=DEFAULT_NUM_GROUPS)
    parser.add_argument("--min-size", type=int, default=DEFAULT_MIN_SIZE,
                        help="Smallest random table capacity and group size.")
    parser.add_argument("--max-size", type=int, default=DEFAULT_MAX_SIZE,
                        help="Upper bound (exclusive) for random capacities and sizes.")
    parser.add_argument("--reject-unseatable", action="store_true",
                        help="Fail on groups larger than every table instead of queueing them.")
    parser.add_argument("--out-log", type=Path,
                        help="Write the event log CSV (replay mode only).")
    parser.add_argument("--out-report", type=Path,
                        help="Write per-table report CSV with occupancy figures.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _write_csv(path: Path, fieldnames: List[str], rows: List[Dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for row in rows:
            w.writerow(row)


def build_report(manager: SeatingManager) -> List[Dict[str, object]]:
    """Per table stats plus the names of the groups sitting there."""
    seated = manager.seated_groups()
    rows = []
    for table, s in zip(manager.tables, compute_table_stats(manager.tables)):
        row = dict(s)
        row["utilization"] = f"{s['utilization']:.4f}"
        row["groups"] = "|".join(g.name for g in seated.get(table, []))
        rows.append(row)
    return rows


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point used by ``python -m restaurant_seating.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.events and not args.tables:
        parser.error("--events requires --tables")
    if args.min_size < 1:
        parser.error("--min-size must be at least 1")
    if args.min_size >= args.max_size:
        parser.error("--max-size must be greater than --min-size")

    if args.tables:
        manager = SeatingManager(load_tables(args.tables),
                                 reject_unseatable=args.reject_unseatable)
        log = replay(manager, load_events(args.events)) if args.events else []
        for row in log:
            where = f" @ {row['table']}" if row["table"] else ""
            print(f"{row['step']}: {row['event']} {row['group']} ({row['size']}) -> {row['outcome']}{where}")
        if args.out_log:
            _write_csv(args.out_log, LOG_FIELDS, log)
    else:
        result = run_demo(
            random.Random(args.seed),
            num_tables=args.num_tables,
            num_groups=args.num_groups,
            low=args.min_size,
            high=args.max_size,
            reject_unseatable=args.reject_unseatable,
        )
        manager = result.manager
        for g in result.groups:
            table = manager.locate(g)
            print(f"{g.name},{g.size},{table.name if table is not None else 'waiting'}")
        if result.departed is not None:
            backfilled = ",".join(g.name for g in result.backfilled) or "none"
            print(f"[DEMO] {result.departed.name} left, backfilled: {backfilled}")
        if len(result.groups) > 1:
            located = result.located.name if result.located is not None else "waiting"
            print(f"[DEMO] locate {result.groups[1].name} -> {located}")

    report = build_report(manager)
    for row in report:
        print(f"[REPORT] {row['table']} occupied={row['occupied']}/{row['capacity']} "
              f"free={row['free_seats']} groups={row['groups'] or '-'}")
    totals = summarize(manager)
    print(f"[REPORT] total occupied={totals['occupied']}/{totals['capacity']} "
          f"seated={totals['seated_groups']} waiting={totals['waiting_groups']}")

    if args.out_report:
        _write_csv(args.out_report, REPORT_FIELDS, report)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
