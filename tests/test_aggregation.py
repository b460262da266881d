from datetime import date
from types import SimpleNamespace

import pytest

from sprintcal.core.aggregation import (
    aggregate_multiple_sprints,
    aggregate_weekly_to_sprint,
    extract_sprints,
    scan_weekly_records,
    sprint_history_from_data,
)
from sprintcal.core.history import sprint_history
from sprintcal.datatypes import IsoWeek, SkipReason, SprintAggregate, WeeklyRecord


def _week(week_number, year=None, **payload):
    week = {"weekNumber": week_number}
    if year is not None:
        week["year"] = year
    return {"week": week, **payload}


def total_v(items):
    return sum(i["v"] for i in items)


@pytest.fixture
def weekly_data():
    return [
        _week(2, 2025, v=5),
        _week(3, 2025, v=7),
        _week(4, 2025, v=1),
        _week(10, 2025, v=2),
        _week(11, 2025, v=3),
        _week(2, 2026, v=100),
        _week(52, 2025, v=20),
        _week(1, 2026, v=30),
    ]


def test_aggregate_empty():
    assert aggregate_weekly_to_sprint([], 1, total_v) is None
    assert aggregate_weekly_to_sprint([], 1, len) is None


def test_aggregate_weekly_to_sprint():
    records = [_week(2, 2025, v=5), _week(3, 2025, v=7)]
    assert aggregate_weekly_to_sprint(records, 1, total_v, 2025) == 12


def test_aggregate_without_year_ignores_years(weekly_data):
    assert aggregate_weekly_to_sprint(weekly_data, 1, total_v) == 112


def test_aggregate_filters_by_year(weekly_data):
    assert aggregate_weekly_to_sprint(weekly_data, 1, total_v, 2025) == 12
    assert aggregate_weekly_to_sprint(weekly_data, 1, total_v, 2026) == 100
    assert aggregate_weekly_to_sprint(weekly_data, 1, total_v, 2024) is None


def test_aggregate_keeps_records_without_year():
    records = [_week(2, v=1), _week(3, 2025, v=2), _week(3, 2024, v=4)]
    assert aggregate_weekly_to_sprint(records, 1, total_v, 2025) == 3


def test_aggregate_wrapped_sprint_matches_exact_year(weekly_data):
    records = weekly_data + [_week(1, 2025, v=1000)]
    assert aggregate_weekly_to_sprint(records, 26, total_v, 2025) == 1020


def test_aggregate_wrapped_sprint_takes_week_one_of_next_year(weekly_data):
    records = weekly_data + [_week(1, 2025, v=1000)]
    assert aggregate_weekly_to_sprint(records, 26, total_v, 2025, wrap_year=True) == 50
    assert aggregate_weekly_to_sprint(records, 1, total_v, 2025, wrap_year=True) == 12


def test_aggregate_passes_original_items_to_reducer(weekly_data):
    items = aggregate_weekly_to_sprint(weekly_data, 5, list, 2025)
    assert items == [weekly_data[3], weekly_data[4]]
    assert items[0] is weekly_data[3]


def test_aggregate_skips_malformed_records():
    records = [
        {"v": 1},
        {"week": None, "v": 1},
        {"week": {"year": 2025}, "v": 1},
        {"week": {"weekNumber": "nope", "year": 2025}, "v": 1},
        None,
        _week(2, 2025, v=5),
    ]
    assert aggregate_weekly_to_sprint(records, 1, total_v, 2025) == 5


@pytest.mark.parametrize("records", [None, "2025-W02", 42, {"week": {"weekNumber": 2, "year": 2025}}])
def test_aggregate_non_collection_input(records):
    assert aggregate_weekly_to_sprint(records, 1, len) is None
    assert aggregate_multiple_sprints(records, [1, 2], len) == []


def test_aggregate_weekly_record_models():
    records = [
        WeeklyRecord[dict](week=IsoWeek(week_number=4, year=2025), payload={"v": 3}),
        WeeklyRecord[dict](week=IsoWeek(week_number=5, year=2025), payload={"v": 4}),
    ]
    assert aggregate_weekly_to_sprint(records, 2, lambda items: sum(r.payload["v"] for r in items), 2025) == 7


def test_aggregate_objects_with_week_attribute():
    records = [SimpleNamespace(week={"week_number": 4, "year": 2025}, v=3)]
    assert aggregate_weekly_to_sprint(records, 2, lambda items: items[0].v) == 3


def test_aggregate_multiple_sprints_keeps_input_order(weekly_data):
    result = aggregate_multiple_sprints(weekly_data, [5, 3, 1, 2], total_v)
    assert result == [
        SprintAggregate(sprint=5, data=5),
        SprintAggregate(sprint=1, data=112),
        SprintAggregate(sprint=2, data=1),
    ]


def test_aggregate_multiple_sprints_accepts_generators(weekly_data):
    result = aggregate_multiple_sprints((r for r in weekly_data), [1, 5], len)
    assert [(r.sprint, r.data) for r in result] == [(1, 3), (5, 2)]


def test_extract_sprints(g):
    sprints = extract_sprints(g, [_week(10, 2025), _week(11, 2025)])
    assert len(sprints) == 1
    sprint = sprints[0]
    assert (sprint.number, sprint.year) == (5, 2025)
    assert sprint.weeks == (10, 11)
    assert sprint.formatted == "3 - 16 mars 2025"
    assert not sprint.is_current


def test_extract_sprints_sorted_latest_first(g, weekly_data):
    sprints = extract_sprints(g, weekly_data)
    assert [(s.year, s.number) for s in sprints] == [
        (2026, 1),
        (2025, 26),
        (2025, 5),
        (2025, 2),
        (2025, 1),
    ]


def test_extract_sprints_skips_records_without_year(g):
    assert extract_sprints(g, [_week(10), {"week": {"weekNumber": 0, "year": 2025}}, {}]) == []


@pytest.mark.parametrize("records", [None, "abc", 3.5, {"week": {"weekNumber": 10, "year": 2025}}])
def test_extract_sprints_non_collection_input(g, records):
    assert extract_sprints(g, records) == []


def test_scan_reports_skipped_records():
    scan = scan_weekly_records(
        [
            _week(10, 2025),
            {"v": 1},
            _week(54, 2025),
            _week(12),
        ]
    )
    assert not scan.is_clean
    assert [s.index for s in scan.records] == [0]
    assert scan.records[0].week == IsoWeek(week_number=10, year=2025)
    assert [(s.index, s.reason) for s in scan.skipped] == [
        (1, SkipReason.missing_week),
        (2, SkipReason.invalid_week),
        (3, SkipReason.missing_year),
    ]


def test_scan_without_year_requirement():
    scan = scan_weekly_records([_week(12)], require_year=False)
    assert scan.is_clean
    assert scan.records[0].week.year is None


def test_sprint_history_from_data(g, weekly_data):
    sprints = sprint_history_from_data(g, weekly_data, 3)
    assert [(s.year, s.number) for s in sprints] == [(2026, 1), (2025, 26), (2025, 5)]


def test_sprint_history_from_data_falls_back_to_history(g):
    assert sprint_history_from_data(g, [], 4) == sprint_history(g, 4)
    assert sprint_history_from_data(g, None, 2, date(2025, 6, 11)) == sprint_history(g, 2, date(2025, 6, 11))


def test_sprint_history_from_data_empty_for_non_positive_count(g, weekly_data):
    assert sprint_history_from_data(g, weekly_data, 0) == []
    assert sprint_history_from_data(g, weekly_data, -1) == []


def test_extract_sprints_skips_out_of_range_years(g):
    records = [_week(52, 9999, v=1), _week(10, 2025, v=2)]
    assert [(s.year, s.number) for s in extract_sprints(g, records)] == [(2025, 5)]
    scan = scan_weekly_records(records)
    assert [s.reason for s in scan.skipped] == [SkipReason.invalid_week]
