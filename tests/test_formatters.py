"""
표시 포맷팅 테스트
"""
from __future__ import annotations

import math

import pandas as pd
import pytest

from bakery_dashboard.domain import STATUS_LOW, STATUS_NO_INVENTORY
from bakery_dashboard.ui.formatters import (
    format_days,
    format_number,
    format_percent,
    format_period,
    format_rate,
    format_timestamp,
    status_badge,
    status_label,
)


@pytest.mark.parametrize(
    "value, decimals, expected",
    [
        (1234, 0, "1,234"),
        (1234.5678, 2, "1,234.57"),
        (0, 0, "0"),
        (None, 0, "-"),
        (math.nan, 0, "-"),
        (True, 0, "-"),
    ],
)
def test_format_number(value, decimals, expected):
    assert format_number(value, decimals=decimals) == expected


def test_format_days_rounds_for_display_only():
    assert format_days(7.04) == "7.0 days"
    assert format_days(None) == "N/A"


def test_format_rate():
    assert format_rate(0) == "N/A"
    assert format_rate(2.5) == "2.50"


def test_format_percent():
    assert format_percent(12.345) == "+12.3%"
    assert format_percent(-5) == "-5.0%"
    assert format_percent(None) == "-"


def test_format_timestamp():
    assert format_timestamp(pd.Timestamp("2024-03-01 14:05:59")) == "2024-03-01 14:05"
    assert format_timestamp(None) == "Never"


def test_format_period():
    assert format_period("2024-03-01") == "Mar 01, 2024"
    assert format_period("2024-03") == "Mar 2024"
    assert format_period("") == "-"


def test_status_text():
    assert status_label(STATUS_LOW) == "Low Stock"
    assert status_badge(STATUS_NO_INVENTORY) == "⚪ No Inventory"
