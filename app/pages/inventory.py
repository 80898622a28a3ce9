"""
재고 페이지

Live inventory with restock status, suggested order quantities and inline
quantity / restock threshold editing.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import streamlit as st

from app import state
from app.pages.filters import render_filter_box, render_sort_header
from bakery_dashboard.core.config import CONFIG
from bakery_dashboard.domain import (
    STATUS_LOW,
    STATUS_NO_INVENTORY,
    STATUS_OK,
    STATUS_REORDER_SOON,
    ApiError,
    Editing,
    Failed,
    InventoryRow,
    Saving,
    begin_edit,
    build_inventory_rows,
    build_view,
    cancel,
    normalize_inventory_positions,
    retry,
    save_failed,
    save_succeeded,
    status_counts,
    submit,
    update_draft,
    validate_lead_time,
    validate_lookback_days,
)
from bakery_dashboard.domain.validation import FIELD_QUANTITY, FIELD_RESTOCK_THRESHOLD
from bakery_dashboard.ui import (
    ErrorNotice,
    build_inventory_frame,
    format_days,
    format_number,
    format_rate,
    handle_domain_errors,
    render_notice,
    status_badge,
    status_label,
)

logger = logging.getLogger(__name__)

PAGE = "inventory"

SORT_COLUMNS = (
    ("display_name", "Item"),
    ("current_quantity", "Qty"),
    ("restock_threshold", "Threshold"),
    ("daily_consumption_rate", "Per day"),
    ("days_until_restock", "Days left"),
    ("suggested_order_quantity", "Suggested"),
    ("urgency", "Status"),
)

ROW_LAYOUT = [3, 1.4, 1.4, 1.2, 1.2, 1.2, 1.6, 2]


def _on_error(notice: ErrorNotice) -> None:
    state.set_page_error(PAGE, notice)


# ========================================
# 데이터 로딩
# ========================================


def load_inventory(lookback_days: int, lead_time_days: int) -> None:
    """
    Fetch, normalize and classify the inventory list.

    The result is committed only if no newer fetch was started meanwhile.
    The attempted parameters are recorded first, so a failed fetch is not
    repeated on every rerun.
    """
    state.set_inventory_attempt(lookback_days, lead_time_days)
    gate = state.get_gate(PAGE)
    client = state.get_api_client()

    with handle_domain_errors(on_error=_on_error):
        lookback_days = validate_lookback_days(lookback_days)
        lead_time_days = validate_lead_time(lead_time_days)

        token = gate.begin()
        with st.spinner("Loading inventory..."):
            raw_rows = client.get_inventory(
                lookback_days=lookback_days, lead_time_days=lead_time_days
            )
        positions, skipped = normalize_inventory_positions(
            raw_rows,
            lead_time_days=lead_time_days,
            default_threshold=CONFIG.inventory.default_restock_threshold,
        )
        rows = build_inventory_rows(positions)

        if gate.accept(token):
            state.set_inventory_result(
                state.InventoryResult(
                    rows=rows,
                    lookback_days=lookback_days,
                    lead_time_days=lead_time_days,
                    skipped=skipped,
                )
            )
            state.clear_page_error(PAGE)
            logger.info(f"Inventory view updated: {len(rows)} item(s), {skipped} skipped")


def ensure_inventory(lookback_days: int, lead_time_days: int, *, refresh: bool = False) -> None:
    """Fetch only on Refresh or when the settings differ from the last attempt."""
    if refresh or state.get_inventory_attempt() != (lookback_days, lead_time_days):
        load_inventory(lookback_days, lead_time_days)


# ========================================
# 설정 / 요약
# ========================================


def _render_settings() -> tuple[int, int, bool]:
    inventory = CONFIG.inventory
    col_lookback, col_lead, col_refresh = st.columns([2, 2, 1])
    with col_lookback:
        lookback = st.number_input(
            "Consumption lookback (days)",
            min_value=inventory.min_lookback_days,
            max_value=inventory.max_lookback_days,
            value=inventory.default_lookback_days,
            step=1,
            key=f"{PAGE}_lookback_days",
        )
    with col_lead:
        lead_time = st.number_input(
            "Distributor lead time (days)",
            min_value=inventory.min_lead_time_days,
            max_value=inventory.max_lead_time_days,
            value=inventory.default_lead_time_days,
            step=1,
            key=f"{PAGE}_lead_time_days",
        )
    with col_refresh:
        st.markdown("<br>", unsafe_allow_html=True)
        refresh = st.button("Refresh", key=f"{PAGE}_refresh", use_container_width=True)
    return int(lookback), int(lead_time), refresh


def _render_status_cards(rows: List[InventoryRow]) -> None:
    counts = status_counts(rows)
    order = (STATUS_LOW, STATUS_REORDER_SOON, STATUS_OK, STATUS_NO_INVENTORY)
    for slot, status in zip(st.columns(len(order)), order):
        slot.metric(status_badge(status), counts[status])


def _render_error_panel() -> None:
    notice = state.get_page_error(PAGE)
    if notice is None:
        return
    if render_notice(notice, dismiss_key=f"{PAGE}_dismiss_error"):
        state.clear_page_error(PAGE)
        st.rerun()


# ========================================
# 행 편집
# ========================================


def _save_row(row: InventoryRow, saving: Saving) -> bool:
    """Send the save request; the row ends up Viewing or Failed."""
    client = state.get_api_client()
    try:
        with st.spinner(f"Saving {row.display_name}..."):
            client.update_inventory(
                row.entity_key,
                quantity=saving.quantity,
                restock_threshold=saving.restock_threshold,
            )
    except ApiError as exc:
        logger.warning(f"Save failed for {row.entity_key}: {exc.message}")
        state.set_edit_state(row.entity_key, save_failed(saving, exc))
        return False

    state.set_edit_state(row.entity_key, save_succeeded(saving))
    return True


def _reset_draft_widgets(entity_key: str) -> None:
    # text inputs keep their last value by widget key across reruns
    for prefix in ("qty", "threshold"):
        st.session_state.pop(f"{PAGE}_{prefix}_{entity_key}", None)


def _render_row_values(cols, row: InventoryRow) -> None:
    cols[1].write(format_number(row.current_quantity))
    cols[2].write(format_number(row.restock_threshold))
    cols[3].write(format_rate(row.daily_consumption_rate))
    cols[4].write(format_days(row.days_until_restock))
    cols[5].write(format_number(row.suggested_order_quantity))
    cols[6].write(status_badge(row.status))


def _render_editing(
    cols, row: InventoryRow, editing: Editing, result: state.InventoryResult
) -> bool:
    key = row.entity_key
    quantity_text = cols[1].text_input(
        "Quantity",
        value=editing.draft_quantity,
        key=f"{PAGE}_qty_{key}",
        label_visibility="collapsed",
    )
    threshold_text = cols[2].text_input(
        "Restock threshold",
        value=editing.draft_threshold,
        key=f"{PAGE}_threshold_{key}",
        placeholder="auto",
        label_visibility="collapsed",
    )
    if FIELD_QUANTITY in editing.field_errors:
        cols[1].caption(f":red[{editing.field_errors[FIELD_QUANTITY]}]")
    if FIELD_RESTOCK_THRESHOLD in editing.field_errors:
        cols[2].caption(f":red[{editing.field_errors[FIELD_RESTOCK_THRESHOLD]}]")
    cols[3].write(format_rate(row.daily_consumption_rate))
    cols[6].write(status_badge(row.status))

    col_save, col_cancel = cols[7].columns(2)
    if col_save.button("Save", key=f"{PAGE}_save_{key}", type="primary"):
        drafted = update_draft(editing, quantity=quantity_text, threshold=threshold_text)
        outcome = submit(drafted)
        state.set_edit_state(key, outcome)
        if isinstance(outcome, Saving) and _save_row(row, outcome):
            load_inventory(result.lookback_days, result.lead_time_days)
        return True
    if col_cancel.button("Cancel", key=f"{PAGE}_cancel_{key}"):
        state.set_edit_state(key, cancel(editing))
        return True
    return False


def _render_failed(cols, row: InventoryRow, failed: Failed) -> bool:
    key = row.entity_key
    _render_row_values(cols, row)
    col_retry, col_cancel = cols[7].columns(2)
    details = "".join(f"\n- {line}" for line in failed.details)
    st.error(f"Could not save {row.display_name}: {failed.message}{details}")

    if col_retry.button("Retry", key=f"{PAGE}_retry_{key}"):
        state.set_edit_state(key, retry(failed))
        return True
    if col_cancel.button("Cancel", key=f"{PAGE}_cancel_{key}"):
        state.set_edit_state(key, cancel(failed))
        return True
    return False


def _render_row(row: InventoryRow, result: state.InventoryResult) -> None:
    cols = st.columns(ROW_LAYOUT)
    cols[0].markdown(f"**{row.display_name}**")
    if row.entity_key != row.display_name:
        cols[0].caption(row.entity_key)

    edit_state = state.get_edit_state(row.entity_key)
    needs_rerun = False
    with handle_domain_errors(on_error=_on_error):
        if isinstance(edit_state, Editing):
            needs_rerun = _render_editing(cols, row, edit_state, result)
        elif isinstance(edit_state, Failed):
            needs_rerun = _render_failed(cols, row, edit_state)
        elif isinstance(edit_state, Saving):
            _render_row_values(cols, row)
            cols[7].caption("Saving...")
        else:
            _render_row_values(cols, row)
            if cols[7].button("Edit", key=f"{PAGE}_edit_{row.entity_key}"):
                _reset_draft_widgets(row.entity_key)
                state.set_edit_state(row.entity_key, begin_edit(row.position))
                needs_rerun = True

    if needs_rerun:
        st.rerun()


def _render_table(result: state.InventoryResult) -> None:
    filter_text = render_filter_box(PAGE, placeholder="Search items by name or key")
    sort_state = render_sort_header(
        PAGE, SORT_COLUMNS, default_key=CONFIG.ui.inventory_default_sort
    )

    view = build_view(result.rows, filter_text, sort_state)
    st.caption(f"Showing {len(view)} of {len(result.rows)} items")
    if not view:
        st.info("No items match the filter.")
        return

    header = st.columns(ROW_LAYOUT)
    for slot, label in zip(
        header,
        ("Item", "Qty", "Threshold", "Per day", "Days left", "Suggested", "Status", ""),
    ):
        slot.markdown(f"**{label}**")

    for row in view[: CONFIG.ui.max_table_rows]:
        _render_row(row, result)

    with st.expander("Table view / export", expanded=False):
        frame = build_inventory_frame(view)
        st.dataframe(
            frame,
            use_container_width=True,
            hide_index=True,
            height=CONFIG.ui.table_height_inventory,
        )
        st.download_button(
            "Download CSV",
            frame.to_csv(index=False).encode("utf-8"),
            file_name="inventory.csv",
            mime="text/csv",
            key=f"{PAGE}_download",
        )


def _render_help(lead_time_days: int) -> None:
    st.info(
        "**How restock status works**\n\n"
        f"- {status_label(STATUS_LOW)}: quantity is at or below the restock threshold\n"
        f"- {status_label(STATUS_REORDER_SOON)}: the threshold will be reached within "
        f"the {lead_time_days}-day lead time\n"
        f"- {status_label(STATUS_NO_INVENTORY)}: no stock and no recent consumption\n"
        "- Suggested order = threshold + daily consumption x lead time - current quantity\n"
        "- Leave the threshold blank when editing to use the automatic default"
    )


# ========================================
# 페이지 엔트리
# ========================================


def render_inventory_page() -> None:
    st.header("📦 Inventory")

    lookback, lead_time, refresh = _render_settings()

    ensure_inventory(lookback, lead_time, refresh=refresh)
    result: Optional[state.InventoryResult] = state.get_inventory_result()

    _render_error_panel()

    if result is None:
        st.info("Inventory will appear here once the backend responds.")
        return

    if result.skipped:
        st.warning(f"{result.skipped} inventory row(s) could not be read and were skipped.")

    _render_status_cards(result.rows)
    _render_table(result)
    _render_help(result.lead_time_days)
