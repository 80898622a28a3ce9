"""
UI 계층 모듈

Streamlit-facing helpers: display formatting, table frames, the forecast
chart and the domain error adapter.
"""

from .adapters import ErrorNotice, describe_error, handle_domain_errors, render_notice
from .charts import build_forecast_trend_figure
from .formatters import (
    format_days,
    format_number,
    format_percent,
    format_rate,
    format_timestamp,
    status_badge,
    status_label,
)
from .tables import (
    build_detail_frame,
    build_inventory_frame,
    build_summary_frame,
    build_trend_frame,
    has_baseline,
)

__all__ = [
    "ErrorNotice",
    "describe_error",
    "handle_domain_errors",
    "render_notice",
    "build_forecast_trend_figure",
    "format_days",
    "format_number",
    "format_percent",
    "format_rate",
    "format_timestamp",
    "status_badge",
    "status_label",
    "build_detail_frame",
    "build_inventory_frame",
    "build_summary_frame",
    "build_trend_frame",
    "has_baseline",
]
