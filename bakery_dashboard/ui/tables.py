"""
테이블 데이터 변환 모듈

Builds the DataFrames handed to ``st.dataframe``. Row order is whatever the
view engine produced; these helpers only select and format columns.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from bakery_dashboard.domain.models import CanonicalRecord, GroupSummary, InventoryRow

from .formatters import (
    format_days,
    format_number,
    format_percent,
    format_period,
    format_rate,
    format_timestamp,
    status_badge,
)

SUMMARY_COLUMNS = ["SKU", "Total Forecast", "Avg/Day", "Min", "Max", "Date Range"]
BASELINE_COLUMNS = ["Historical Avg", "Growth"]

INVENTORY_COLUMNS = [
    "Item",
    "Key",
    "Current Qty",
    "Restock Threshold",
    "Daily Consumption",
    "Days Until Restock",
    "Suggested Order",
    "Status",
    "Last Updated",
]

# (extra field, column label, numeric)
DETAIL_EXTRA_COLUMNS = (
    ("dayOfWeek", "Day", False),
    ("pattern", "Pattern", True),
)


def has_baseline(summaries: Iterable[GroupSummary]) -> bool:
    """Whether any group carries a baseline worth a column."""
    return any(summary.baseline is not None for summary in summaries)


def build_summary_frame(
    summaries: Sequence[GroupSummary],
    *,
    include_baseline: bool,
) -> pd.DataFrame:
    """
    SKU summary table in view order.

    Args:
        summaries: filtered and sorted summaries
        include_baseline: add historical average and growth columns

    Returns:
        Display DataFrame (formatted strings)
    """
    columns = SUMMARY_COLUMNS + (BASELINE_COLUMNS if include_baseline else [])
    rows: List[dict] = []
    for summary in summaries:
        row = {
            "SKU": summary.display_name,
            "Total Forecast": format_number(summary.total),
            "Avg/Day": format_number(summary.average),
            "Min": format_number(summary.min),
            "Max": format_number(summary.max),
            "Date Range": summary.date_range,
        }
        if include_baseline:
            row["Historical Avg"] = format_number(summary.baseline)
            row["Growth"] = format_percent(summary.growth_pct)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def build_detail_frame(records: Sequence[CanonicalRecord]) -> pd.DataFrame:
    """
    Per-period rows of one group.

    Optional columns (day of week, pattern) appear only when at least one
    record carries them.
    """
    extra_columns = [
        (name, label, numeric)
        for name, label, numeric in DETAIL_EXTRA_COLUMNS
        if any(name in record.extra for record in records)
    ]

    rows: List[dict] = []
    for record in records:
        row = {
            "Date": format_period(record.period),
            "Forecast": format_number(record.value),
        }
        for name, label, numeric in extra_columns:
            value = record.extra.get(name)
            if value is None:
                row[label] = "-"
            elif numeric:
                row[label] = format_number(value, decimals=2)
            else:
                row[label] = str(value)
        rows.append(row)

    columns = ["Date", "Forecast"] + [label for _, label, _ in extra_columns]
    return pd.DataFrame(rows, columns=columns)


def build_inventory_frame(rows: Sequence[InventoryRow]) -> pd.DataFrame:
    """Inventory table in view order; days are rounded here, for display only."""
    records = [
        {
            "Item": row.display_name,
            "Key": row.entity_key,
            "Current Qty": format_number(row.current_quantity),
            "Restock Threshold": format_number(row.restock_threshold),
            "Daily Consumption": format_rate(row.daily_consumption_rate),
            "Days Until Restock": format_days(row.days_until_restock),
            "Suggested Order": format_number(row.suggested_order_quantity),
            "Status": status_badge(row.status),
            "Last Updated": format_timestamp(row.last_updated),
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=INVENTORY_COLUMNS)


def build_trend_frame(records: Iterable[CanonicalRecord]) -> pd.DataFrame:
    """
    Long-format frame for the trend chart: ``date``, ``series``, ``value``.

    One series per entity key, labelled with the first display name seen for
    it; two keys that share a name are told apart by their key. Duplicate
    ``(key, date)`` pairs are summed, matching the aggregator.
    """
    labels: Dict[str, str] = {}
    rows: List[dict] = []
    for record in records:
        labels.setdefault(record.entity_key, record.display_name)
        rows.append({"key": record.entity_key, "date": record.period, "value": record.value})

    frame = pd.DataFrame(rows, columns=["key", "date", "value"])
    if frame.empty:
        return pd.DataFrame(columns=["date", "series", "value"])

    name_counts = Counter(labels.values())
    series_names = {
        key: name if name_counts[name] == 1 else f"{name} ({key})"
        for key, name in labels.items()
    }

    frame["date"] = pd.to_datetime(frame["date"], errors="coerce")
    frame = frame.dropna(subset=["date"])
    frame = frame.groupby(["key", "date"], sort=False, as_index=False)["value"].sum()
    frame["series"] = frame["key"].map(series_names)
    return (
        frame.sort_values(["series", "date"], kind="stable")
        .reset_index(drop=True)[["date", "series", "value"]]
    )
