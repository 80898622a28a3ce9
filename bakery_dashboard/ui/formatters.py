"""표시용 포맷팅 유틸리티 모듈.

Numbers, days, dates and restock statuses as they appear in tables and
cards. Rounding for display lives here and nowhere else.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from bakery_dashboard.domain.models import (
    STATUS_LOW,
    STATUS_NO_INVENTORY,
    STATUS_OK,
    STATUS_REORDER_SOON,
)

STATUS_LABELS = {
    STATUS_LOW: "Low Stock",
    STATUS_REORDER_SOON: "Reorder Soon",
    STATUS_OK: "OK",
    STATUS_NO_INVENTORY: "No Inventory",
}

STATUS_BADGES = {
    STATUS_LOW: "🔴",
    STATUS_REORDER_SOON: "🟡",
    STATUS_OK: "🟢",
    STATUS_NO_INVENTORY: "⚪",
}


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_number(value: float | int | None, decimals: int = 0) -> str:
    """숫자를 천 단위 구분 기호가 있는 문자열로 포맷팅합니다.

    Args:
        value: 포맷팅할 숫자
        decimals: 소수점 자리수

    Returns:
        "1,234" 형식의 문자열 또는 "-"
    """
    if _is_missing(value) or isinstance(value, bool):
        return "-"
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "-"
    if decimals <= 0:
        return f"{int(round(number)):,}"
    return f"{number:,.{decimals}f}"


def format_days(value: Optional[float]) -> str:
    """Days until restock, one decimal: ``"3.0 days"`` or ``"N/A"``."""
    if _is_missing(value):
        return "N/A"
    return f"{float(value):.1f} days"  # type: ignore[arg-type]


def format_rate(value: Optional[float]) -> str:
    """Daily consumption; zero means "no consumption data"."""
    if _is_missing(value) or float(value) <= 0:  # type: ignore[arg-type]
        return "N/A"
    return format_number(value, decimals=2)


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    """Signed percent (``"+12.5%"``); ``"-"`` when missing."""
    if _is_missing(value):
        return "-"
    number = float(value)  # type: ignore[arg-type]
    sign = "+" if number > 0 else ""
    return f"{sign}{number:.{decimals}f}%"


def format_timestamp(value: Optional[pd.Timestamp]) -> str:
    """Last-updated cell: ``"2024-03-01 14:05"`` or ``"Never"``."""
    if _is_missing(value):
        return "Never"
    try:
        return pd.Timestamp(value).strftime("%Y-%m-%d %H:%M")
    except (TypeError, ValueError):
        return "Never"


def format_period(value: Optional[str]) -> str:
    """ISO period for detail rows: ``"Mar 01, 2024"``, or ``"Mar 2024"`` for a month."""
    if not value:
        return "-"
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return str(value)
    if len(str(value)) == 7:
        return ts.strftime("%b %Y")
    return ts.strftime("%b %d, %Y")


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def status_badge(status: str) -> str:
    """Badge text for a status cell, e.g. ``"🔴 Low Stock"``."""
    return f"{STATUS_BADGES.get(status, '⚪')} {status_label(status)}"
