"""
입력 검증 테스트
"""
from __future__ import annotations

import datetime as dt

import pytest

from bakery_dashboard.domain import (
    ValidationError,
    build_forecast_request,
    parse_non_negative_int,
    validate_lead_time,
    validate_lookback_days,
)


@pytest.mark.parametrize("text, expected", [("0", 0), (" 12 ", 12), (7, 7), (3.0, 3)])
def test_parse_valid(text, expected):
    assert parse_non_negative_int(text, "quantity") == expected


@pytest.mark.parametrize("text", ["-1", "1.5", "abc", "", None, True, 2.5])
def test_parse_invalid(text):
    with pytest.raises(ValidationError) as exc_info:
        parse_non_negative_int(text, "quantity")
    assert exc_info.value.field == "quantity"
    assert str(exc_info.value) == "Quantity must be a non-negative number"


def test_parse_blank_allowed():
    assert parse_non_negative_int("", "restock_threshold", allow_blank=True) is None


@pytest.mark.parametrize("days", [1, 7, 30])
def test_lead_time_in_range(days):
    assert validate_lead_time(days) == days


@pytest.mark.parametrize("days", [0, 31, 7.5, "7"])
def test_lead_time_out_of_range(days):
    with pytest.raises(ValidationError):
        validate_lead_time(days)


@pytest.mark.parametrize("days, ok", [(7, True), (90, True), (6, False), (91, False)])
def test_lookback_bounds(days, ok):
    if ok:
        assert validate_lookback_days(days) == days
    else:
        with pytest.raises(ValidationError):
            validate_lookback_days(days)


class TestForecastRequest:
    def _build(self, **overrides):
        params = dict(
            start_date=dt.date(2024, 3, 1),
            horizon_days=7,
            increment="day",
            growth_rate=1.0,
            lookback_weeks=4,
        )
        params.update(overrides)
        return build_forecast_request(**params)

    def test_end_date_is_inclusive(self):
        request = self._build()
        assert request.end_date == dt.date(2024, 3, 7)

    def test_payload(self):
        payload = self._build(increment="week", growth_rate=1.1, horizon_days=30).to_payload()
        assert payload == {
            "startDate": "2024-03-01",
            "endDate": "2024-03-30",
            "increment": "week",
            "growthRate": 1.1,
            "lookbackWeeks": 4,
        }

    def test_datetime_start_is_truncated(self):
        request = self._build(start_date=dt.datetime(2024, 3, 1, 15, 30))
        assert request.start_date == dt.date(2024, 3, 1)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"start_date": None},
            {"horizon_days": 0},
            {"increment": "hour"},
            {"growth_rate": 0.5},
            {"growth_rate": 1.6},
            {"lookback_weeks": 0},
            {"lookback_weeks": 13},
        ],
    )
    def test_rejected(self, overrides):
        with pytest.raises(ValidationError):
            self._build(**overrides)
