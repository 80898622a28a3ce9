"""
테이블/차트 데이터 변환 테스트
"""
from __future__ import annotations

import pandas as pd

from bakery_dashboard.domain import (
    CanonicalRecord,
    InventoryPosition,
    aggregate,
    build_inventory_rows,
    chronological_members,
)
from bakery_dashboard.ui.charts import build_forecast_trend_figure, series_color_map
from bakery_dashboard.ui.tables import (
    INVENTORY_COLUMNS,
    build_detail_frame,
    build_inventory_frame,
    build_summary_frame,
    build_trend_frame,
    has_baseline,
)


def _records():
    return [
        CanonicalRecord("A", "Bagel", "2024-03-02", 30.0, baseline=10.0, extra={"dayOfWeek": "Saturday"}),
        CanonicalRecord("A", "Bagel", "2024-03-01", 10.0, baseline=10.0),
        CanonicalRecord("B", "Rye", "2024-03-01", 5.0),
    ]


def test_summary_frame_with_baseline():
    summaries = list(aggregate(_records()).values())
    assert has_baseline(summaries)

    frame = build_summary_frame(summaries, include_baseline=True)

    assert list(frame.columns) == [
        "SKU",
        "Total Forecast",
        "Avg/Day",
        "Min",
        "Max",
        "Date Range",
        "Historical Avg",
        "Growth",
    ]
    assert frame.iloc[0]["Total Forecast"] == "40"
    assert frame.iloc[0]["Date Range"] == "2024-03-01 to 2024-03-02"
    assert frame.iloc[0]["Growth"] == "+100.0%"
    assert frame.iloc[1]["Growth"] == "-"


def test_summary_frame_without_baseline():
    summaries = list(aggregate(_records()[2:]).values())
    assert not has_baseline(summaries)
    assert "Growth" not in build_summary_frame(summaries, include_baseline=False).columns


def test_detail_frame_optional_columns():
    summary = aggregate(_records())["A"]

    frame = build_detail_frame(chronological_members(summary))

    assert list(frame.columns) == ["Date", "Forecast", "Day"]
    assert list(frame["Date"]) == ["Mar 01, 2024", "Mar 02, 2024"]
    assert list(frame["Day"]) == ["-", "Saturday"]


def test_detail_frame_plain():
    frame = build_detail_frame([CanonicalRecord("B", "Rye", "2024-03-01", 5.0)])
    assert list(frame.columns) == ["Date", "Forecast"]


def test_inventory_frame():
    rows = build_inventory_rows([InventoryPosition("g", "Bagel", 50, 20, 10.0, 7)])

    frame = build_inventory_frame(rows)

    assert list(frame.columns) == INVENTORY_COLUMNS
    row = frame.iloc[0]
    assert row["Days Until Restock"] == "3.0 days"
    assert row["Suggested Order"] == "40"
    assert row["Status"] == "🟡 Reorder Soon"
    assert row["Last Updated"] == "Never"


def test_trend_frame_sums_duplicates():
    records = _records() + [CanonicalRecord("B", "Rye", "2024-03-01", 2.0)]

    frame = build_trend_frame(records)

    rye = frame[frame["series"] == "Rye"]
    assert len(rye) == 1
    assert rye.iloc[0]["value"] == 7.0
    assert frame["date"].dtype.kind == "M"
    assert list(frame[frame["series"] == "Bagel"]["date"]) == [
        pd.Timestamp("2024-03-01"),
        pd.Timestamp("2024-03-02"),
    ]


def test_trend_frame_groups_by_entity_key():
    records = [
        CanonicalRecord("A", "Bagel", "2024-03-01", 4.0),
        CanonicalRecord("A", "bagel", "2024-03-01", 6.0),
        CanonicalRecord("A", "bagel", "2024-03-02", 1.0),
    ]

    frame = build_trend_frame(records)

    assert list(frame["series"]) == ["Bagel", "Bagel"]
    assert list(frame["value"]) == [10.0, 1.0]


def test_trend_frame_keeps_keys_with_same_name_apart():
    records = [
        CanonicalRecord("A", "Bagel", "2024-03-01", 4.0),
        CanonicalRecord("B", "Bagel", "2024-03-01", 6.0),
    ]

    frame = build_trend_frame(records)

    assert list(frame["series"]) == ["Bagel (A)", "Bagel (B)"]
    assert list(frame["value"]) == [4.0, 6.0]


def test_trend_figure():
    figure = build_forecast_trend_figure(_records(), height=300)

    assert [trace.name for trace in figure.data] == ["Bagel", "Rye"]
    assert figure.layout.height == 300
    assert figure.layout.hovermode == "x unified"


def test_trend_figure_empty():
    assert build_forecast_trend_figure([]) is None


def test_color_map_is_stable():
    colors = series_color_map(["a", "b", "a"])
    assert list(colors) == ["a", "b"]
    assert colors["a"] != colors["b"]
