"""Shared filter box and sortable header controls for the table pages."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import streamlit as st

from app import state
from bakery_dashboard.domain import SortState


def render_filter_box(page: str, *, placeholder: str) -> str:
    """Search box; the text stays in session state under the page's key."""
    return st.text_input(
        "Filter",
        key=f"{page}_filter_text",
        placeholder=placeholder,
        label_visibility="collapsed",
    )


def render_sort_header(
    page: str,
    columns: Sequence[Tuple[str, str]],
    *,
    default_key: str,
) -> SortState:
    """
    One button per sortable column; clicking toggles or switches the sort.

    Args:
        page: session namespace
        columns: ``(sort key, label)`` pairs in display order
        default_key: sort key used before the first click

    Returns:
        The sort state to apply on this run
    """
    current = state.get_sort_state(page, default_key)
    clicked: Optional[str] = None

    st.caption("Sort by")
    for slot, (key, label) in zip(st.columns(len(columns)), columns):
        text = f"{label} {current.arrow}" if key == current.key else label
        if slot.button(text, key=f"{page}_sort_{key}", use_container_width=True):
            clicked = key

    if clicked is not None:
        current = current.click(clicked)
        state.set_sort_state(page, current)
    return current
