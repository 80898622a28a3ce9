"""
그룹 집계 테스트
"""
from __future__ import annotations

import pytest

from bakery_dashboard.domain import (
    CanonicalRecord,
    aggregate,
    find_duplicate_periods,
    grand_total,
    normalize_records,
)


def _rec(key, period, value, *, name=None, baseline=None):
    return CanonicalRecord(key, name or key, period, float(value), baseline=baseline)


def test_two_record_example():
    summaries = aggregate([_rec("A", "2024-01-01", 10), _rec("A", "2024-01-02", 30)])

    summary = summaries["A"]
    assert summary.total == 40
    assert summary.count == 2
    assert summary.average == 20
    assert summary.min == 10
    assert summary.max == 30
    assert summary.date_range == "2024-01-01 to 2024-01-02"


def test_total_is_conserved():
    """모든 그룹 total의 합 = 전체 레코드 값의 합"""
    records = [
        _rec("A", "2024-01-03", 4),
        _rec("B", "2024-01-01", 2.5),
        _rec("A", "2024-01-01", 6),
        _rec("C", "2024-01-02", 0),
        _rec("B", "2024-01-02", 7.5),
    ]

    summaries = aggregate(records)

    assert grand_total(summaries.values()) == pytest.approx(sum(r.value for r in records))
    assert sum(s.count for s in summaries.values()) == len(records)


def test_key_order_is_first_seen():
    summaries = aggregate(
        [_rec("B", "2024-01-01", 1), _rec("A", "2024-01-01", 1), _rec("B", "2024-01-02", 1)]
    )
    assert list(summaries) == ["B", "A"]


def test_date_range_ignores_arrival_order():
    summaries = aggregate([_rec("A", "2024-01-05", 1), _rec("A", "2024-01-02", 1)])
    assert summaries["A"].date_range_start == "2024-01-02"
    assert summaries["A"].date_range_end == "2024-01-05"


def test_members_keep_arrival_order():
    first = _rec("A", "2024-01-05", 1)
    second = _rec("A", "2024-01-02", 2)
    assert aggregate([first, second])["A"].members == (first, second)


def test_name_and_baseline_from_first_member():
    summaries = aggregate(
        [
            _rec("A", "2024-01-01", 5, name="Bagel", baseline=4),
            _rec("A", "2024-01-02", 5, name="Bagel (old)", baseline=9),
        ]
    )

    assert summaries["A"].display_name == "Bagel"
    assert summaries["A"].baseline == 4
    assert summaries["A"].growth_pct == pytest.approx(25.0)


def test_growth_requires_positive_baseline():
    summaries = aggregate([_rec("A", "2024-01-01", 5, baseline=0), _rec("B", "2024-01-01", 5)])
    assert summaries["A"].growth_pct is None
    assert summaries["B"].growth_pct is None


def test_empty_input():
    assert aggregate([]) == {}
    assert grand_total([]) == 0


def test_duplicates_are_summed_and_reported():
    summaries = aggregate(
        [
            _rec("A", "2024-01-01", 1),
            _rec("A", "2024-01-01", 2),
            _rec("A", "2024-01-01", 3),
            _rec("B", "2024-01-01", 1),
        ]
    )

    assert summaries["A"].total == 6
    assert summaries["A"].count == 3
    assert find_duplicate_periods(summaries.values()) == [("A", "2024-01-01")]


def test_aggregate_from_payload(forecast_payload):
    result = normalize_records(forecast_payload["data"])
    summaries = aggregate(result.records)

    assert summaries["BAGEL"].total == 40
    assert summaries["CROISSANT"].baseline == 4
    assert find_duplicate_periods(summaries.values()) == []
