import io
import pathlib
import random
import sys

import pytest

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from restaurant_seating import InvalidState, SeatingManager, csv_loader, simulation


DATA_DIR = pathlib.Path(__file__).parent / "data"


def test_full_flow():
    tables, events = csv_loader.load_all(DATA_DIR / "tables.csv", DATA_DIR / "events.csv")
    assert [t.name for t in tables] == ["Window", "Booth", "Bar"]
    assert [t.capacity for t in tables] == [4, 6, 2]

    manager = SeatingManager(tables)
    log = simulation.replay(manager, events)

    outcomes = [(row["group"], row["outcome"], row["table"]) for row in log]
    assert outcomes == [
        ("Smiths", "seated", "Booth"),
        ("Lees", "queued", ""),
        ("Garcias", "seated", "Window"),
        ("Kims", "queued", ""),
        ("Patels", "seated", "Booth"),
        ("Smiths", "left", "Booth"),
        ("Nguyens", "queued", ""),
        ("Patels", "left", "Booth"),
        ("Lees", "backfilled", "Booth"),
        ("Garcias", "left", "Window"),
    ]

    assert [g.name for g in manager.waiting] == ["Kims", "Nguyens"]
    by_name = {t.name: t for t in tables}
    assert by_name["Booth"].free_seats == 0
    assert by_name["Window"].free_seats == 4
    assert by_name["Bar"].free_seats == 2


def test_events_share_group_objects():
    events = csv_loader.load_events(DATA_DIR / "events.csv")
    smiths = [e.group for e in events if e.group.name == "Smiths"]
    assert len(smiths) == 2
    assert smiths[0] is smiths[1]
    assert smiths[0].size == 4


def test_table_names_default_to_row_numbers():
    tables = csv_loader.load_tables(io.StringIO("capacity\n4\n2\n"))
    assert [t.name for t in tables] == ["T1", "T2"]


def test_tables_need_capacity_column():
    with pytest.raises(ValueError, match="capacity"):
        csv_loader.load_tables(io.StringIO("name,seats\nA,4\n"))


def test_bad_capacity_rejected():
    with pytest.raises(ValueError, match="row 2"):
        csv_loader.load_tables(io.StringIO("name,capacity\nA,4\nB,0\n"))


@pytest.mark.parametrize(
    "text, message",
    [
        ("event,group,size\nsit,A,2\n", "Unknown event"),
        ("event,group,size\nleave,A,2\n", "before arriving"),
        ("event,group,size\narrive,A,\n", "size of group A"),
        ("event,group,size\narrive,A,2\nleave,A,3\n", "has size 3"),
        ("event,group,size\narrive,,2\narrive,,3\n", "Missing group name on row 1"),
    ],
)
def test_bad_events_rejected(text, message):
    with pytest.raises(ValueError, match=message):
        csv_loader.load_events(io.StringIO(text))


def test_replay_propagates_invalid_leave():
    tables = csv_loader.load_tables(io.StringIO("capacity\n2\n"))
    events = csv_loader.load_events(io.StringIO("event,group,size\narrive,A,2\narrive,B,2\nleave,B,\n"))
    with pytest.raises(InvalidState):
        simulation.replay(SeatingManager(tables), events)


def test_demo_is_reproducible():
    first = simulation.run_demo(random.Random(42))
    second = simulation.run_demo(random.Random(42))
    assert [g.size for g in first.groups] == [g.size for g in second.groups]
    assert [t.capacity for t in first.manager.tables] == [t.capacity for t in second.manager.tables]
    assert len(first.manager.waiting) == len(second.manager.waiting)


def test_demo_sizes_within_bounds():
    result = simulation.run_demo(random.Random(3), num_tables=10, num_groups=7)
    assert len(result.manager.tables) == 10
    assert len(result.groups) == 7
    assert all(2 <= t.capacity < 7 for t in result.manager.tables)
    assert all(2 <= g.size < 7 for g in result.groups)


def test_demo_departure_and_lookup():
    # every table and every group has exactly three seats
    result = simulation.run_demo(random.Random(5), low=3, high=4)
    assert result.departed is result.groups[0]
    assert result.departed.table is None
    assert result.backfilled == []
    assert result.located is not None
    assert result.located is result.manager.locate(result.groups[1])


def test_demo_backfills_after_departure():
    # one table, groups of two: the first is seated, the rest queue
    result = simulation.run_demo(random.Random(0), num_tables=1, num_groups=3, low=2, high=3)
    assert result.departed is result.groups[0]
    assert result.backfilled == [result.groups[1]]
    assert result.located is result.manager.tables[0]
    assert result.manager.waiting == (result.groups[2],)
