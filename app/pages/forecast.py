"""
예측 페이지

Forecast parameter form, headline numbers, the per-SKU trend chart and the
SKU summary table with expandable per-period details.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List

import streamlit as st

from app import state
from app.pages.filters import render_filter_box, render_sort_header
from bakery_dashboard.core.config import CONFIG
from bakery_dashboard.domain import (
    ForecastResult,
    GroupSummary,
    aggregate,
    build_forecast_request,
    build_view,
    chronological_members,
    find_duplicate_periods,
    grand_total,
    normalize_forecast_response,
)
from bakery_dashboard.ui import (
    ErrorNotice,
    build_detail_frame,
    build_forecast_trend_figure,
    build_summary_frame,
    format_number,
    handle_domain_errors,
    has_baseline,
    render_notice,
)

logger = logging.getLogger(__name__)

PAGE = "forecast"

SORT_COLUMNS = (
    ("display_name", "SKU"),
    ("total", "Total"),
    ("average", "Avg/Day"),
    ("min", "Min"),
    ("max", "Max"),
    ("date_range_start", "Date Range"),
)
GROWTH_SORT_COLUMN = ("growth_pct", "Growth")


def _on_error(notice: ErrorNotice) -> None:
    state.set_page_error(PAGE, notice)


# ========================================
# 파라미터 폼
# ========================================


def _render_form() -> None:
    forecast = CONFIG.forecast
    preset_labels = [label for label, _ in forecast.horizon_presets]
    preset_days = dict(forecast.horizon_presets)
    default_preset = next(
        (i for i, (_, days) in enumerate(forecast.horizon_presets)
         if days == forecast.default_horizon_days),
        0,
    )

    with st.form(f"{PAGE}_params"):
        col_start, col_horizon, col_increment = st.columns(3)
        with col_start:
            start_date = st.date_input("Start date", value=dt.date.today())
        with col_horizon:
            preset = st.radio("Horizon", preset_labels, index=default_preset, horizontal=True)
        with col_increment:
            increment = st.selectbox(
                "Increment",
                forecast.increments,
                index=forecast.increments.index(forecast.default_increment),
            )

        col_growth, col_weeks = st.columns(2)
        with col_growth:
            growth_rate = st.slider(
                "Growth rate",
                min_value=forecast.min_growth_rate,
                max_value=forecast.max_growth_rate,
                value=forecast.default_growth_rate,
                step=0.05,
                help="1.0 = same as history, 1.1 = 10% more",
            )
        with col_weeks:
            lookback_weeks = st.slider(
                "Lookback (weeks)",
                min_value=forecast.min_lookback_weeks,
                max_value=forecast.max_lookback_weeks,
                value=forecast.default_lookback_weeks,
                step=1,
            )

        submitted = st.form_submit_button("Generate forecast", type="primary")

    if submitted:
        generate_forecast(
            start_date=start_date,
            horizon_days=preset_days[preset],
            increment=increment,
            growth_rate=float(growth_rate),
            lookback_weeks=int(lookback_weeks),
        )


def generate_forecast(
    *,
    start_date: dt.date,
    horizon_days: int,
    increment: str,
    growth_rate: float,
    lookback_weeks: int,
) -> None:
    """Validate the form, call the backend and commit the newest response."""
    gate = state.get_gate(PAGE)
    client = state.get_api_client()

    with handle_domain_errors(on_error=_on_error):
        request = build_forecast_request(
            start_date=start_date,
            horizon_days=horizon_days,
            increment=increment,
            growth_rate=growth_rate,
            lookback_weeks=lookback_weeks,
        )
        token = gate.begin()
        with st.spinner("Generating forecast..."):
            payload = client.generate_forecast(request)
        result = normalize_forecast_response(payload)

        if gate.accept(token):
            state.set_forecast_result(result)
            state.clear_page_error(PAGE)
            logger.info(
                f"Forecast {request.start_date} to {request.end_date} ({request.increment}): "
                f"{len(result.table_records)} record(s), cached={result.cached}"
            )


# ========================================
# 결과 표시
# ========================================


def _render_error_panel() -> None:
    notice = state.get_page_error(PAGE)
    if notice is None:
        return
    if render_notice(notice, dismiss_key=f"{PAGE}_dismiss_error"):
        state.clear_page_error(PAGE)
        st.rerun()


def _render_summary_cards(result: ForecastResult, summaries: Dict[str, GroupSummary]) -> None:
    summary = result.summary
    total = summary.total_forecast if summary else None
    if total is None:
        total = grand_total(summaries.values())
    skus = summary.unique_skus if summary else None
    if skus is None:
        skus = len(summaries)
    periods = summary.periods if summary else None
    average = summary.average_per_period if summary else None

    col_total, col_skus, col_periods, col_avg = st.columns(4)
    col_total.metric("Total forecast", format_number(total))
    col_skus.metric("SKUs", format_number(skus))
    col_periods.metric("Periods", format_number(periods))
    col_avg.metric("Avg per period", format_number(average, decimals=1))

    if result.cached:
        st.caption("⚡ Served from the forecast cache")


def _render_data_notices(result: ForecastResult, summaries: Dict[str, GroupSummary]) -> None:
    if result.skipped:
        st.warning(f"{result.skipped} forecast record(s) could not be read and were skipped.")

    duplicates = find_duplicate_periods(summaries.values())
    if duplicates:
        sample = ", ".join(f"{key} @ {period}" for key, period in duplicates[:5])
        more = f" and {len(duplicates) - 5} more" if len(duplicates) > 5 else ""
        st.caption(f"Repeated periods were summed: {sample}{more}")


def _render_details(view: List[GroupSummary]) -> None:
    expansion = state.get_expansion(PAGE)

    st.markdown("#### Per-period details")
    toggled = False
    for summary in view[: CONFIG.ui.max_table_rows]:
        expanded = expansion.is_expanded(summary.entity_key)
        marker = "▾" if expanded else "▸"
        label = f"{marker} {summary.display_name} ({format_number(summary.total)})"
        if st.button(label, key=f"{PAGE}_expand_{summary.entity_key}"):
            expansion.toggle(summary.entity_key)
            toggled = True
            expanded = not expanded
        if expanded:
            st.dataframe(
                build_detail_frame(chronological_members(summary)),
                use_container_width=True,
                hide_index=True,
                height=CONFIG.ui.table_height_detail,
            )

    if len(expansion) and st.button("Collapse all", key=f"{PAGE}_collapse_all"):
        expansion.clear()
        toggled = True

    if toggled:
        st.rerun()


def _render_table(summaries: Dict[str, GroupSummary]) -> None:
    items = list(summaries.values())
    include_baseline = has_baseline(items)
    columns = SORT_COLUMNS + ((GROWTH_SORT_COLUMN,) if include_baseline else ())

    filter_text = render_filter_box(PAGE, placeholder="Search SKUs")
    sort_state = render_sort_header(PAGE, columns, default_key=CONFIG.ui.forecast_default_sort)

    view = build_view(items, filter_text, sort_state)
    st.caption(f"Showing {len(view)} of {len(items)} SKUs")
    if not view:
        st.info("No SKUs match the filter.")
        return

    st.dataframe(
        build_summary_frame(view[: CONFIG.ui.max_table_rows], include_baseline=include_baseline),
        use_container_width=True,
        hide_index=True,
    )
    _render_details(view)


# ========================================
# 페이지 엔트리
# ========================================


def render_forecast_page() -> None:
    st.header("📈 Forecast")

    _render_form()
    _render_error_panel()

    result = state.get_forecast_result()
    if result is None:
        st.info("Choose the parameters and generate a forecast.")
        return

    summaries = aggregate(result.table_records)
    if not summaries:
        st.info("The forecast returned no data for this period.")
        return

    _render_summary_cards(result, summaries)
    _render_data_notices(result, summaries)

    figure = build_forecast_trend_figure(result.daily_records, height=CONFIG.ui.chart_height)
    if figure is not None:
        st.plotly_chart(figure, use_container_width=True)

    _render_table(summaries)
