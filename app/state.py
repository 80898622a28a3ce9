"""
세션 상태 접근자

Everything the pages keep between Streamlit reruns lives behind these
helpers: the API client, per-page request gates, sort/filter/expansion
state, per-row edit states, the last committed results and the dismissible
error panels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import streamlit as st

from bakery_dashboard.core.config import ApiConfig
from bakery_dashboard.data_sources import BakeryApiClient, RequestGate
from bakery_dashboard.domain import (
    VIEWING,
    ExpansionState,
    ForecastResult,
    InventoryRow,
    RowEditState,
    SortState,
)
from bakery_dashboard.ui.adapters import ErrorNotice

API_CONFIG_KEY = "_api_config"
API_CLIENT_KEY = "_api_client"
GATE_KEY_PREFIX = "_gate_"
SORT_KEY_PREFIX = "_sort_"
EXPANSION_KEY_PREFIX = "_expanded_"
EDIT_STATES_KEY = "_inventory_edit_states"
INVENTORY_KEY = "_inventory_result"
INVENTORY_ATTEMPT_KEY = "_inventory_attempt"
FORECAST_KEY = "_forecast_result"
ERROR_KEY_PREFIX = "_error_"


@dataclass
class InventoryResult:
    """Last committed inventory fetch and the parameters it was made with."""

    rows: List[InventoryRow]
    lookback_days: int
    lead_time_days: int
    skipped: int = 0


# ========================================
# API 클라이언트
# ========================================


def get_api_config() -> ApiConfig:
    config = st.session_state.get(API_CONFIG_KEY)
    if isinstance(config, ApiConfig):
        return config
    config = ApiConfig.from_env()
    st.session_state[API_CONFIG_KEY] = config
    return config


def set_api_base_url(base_url: str) -> bool:
    """
    Point the dashboard at another backend.

    Returns:
        True when the URL actually changed (the client is rebuilt and the
        inventory is fetched again)
    """
    current = get_api_config()
    updated = current.with_base_url(base_url)
    if updated == current:
        return False
    st.session_state[API_CONFIG_KEY] = updated
    st.session_state.pop(API_CLIENT_KEY, None)
    st.session_state.pop(INVENTORY_ATTEMPT_KEY, None)
    return True


def get_api_client() -> BakeryApiClient:
    config = get_api_config()
    client = st.session_state.get(API_CLIENT_KEY)
    if isinstance(client, BakeryApiClient) and client.config == config:
        return client
    client = BakeryApiClient(config)
    st.session_state[API_CLIENT_KEY] = client
    return client


# ========================================
# 요청 게이트 / 정렬 / 확장
# ========================================


def get_gate(name: str) -> RequestGate:
    key = f"{GATE_KEY_PREFIX}{name}"
    gate = st.session_state.get(key)
    if not isinstance(gate, RequestGate):
        gate = RequestGate(name)
        st.session_state[key] = gate
    return gate


def get_sort_state(page: str, default_key: str) -> SortState:
    state = st.session_state.get(f"{SORT_KEY_PREFIX}{page}")
    if isinstance(state, SortState):
        return state
    return SortState(default_key)


def set_sort_state(page: str, state: SortState) -> None:
    st.session_state[f"{SORT_KEY_PREFIX}{page}"] = state


def get_expansion(page: str) -> ExpansionState:
    key = f"{EXPANSION_KEY_PREFIX}{page}"
    expansion = st.session_state.get(key)
    if not isinstance(expansion, ExpansionState):
        expansion = ExpansionState()
        st.session_state[key] = expansion
    return expansion


# ========================================
# 행 편집 상태
# ========================================


def _edit_states() -> Dict[str, RowEditState]:
    states = st.session_state.get(EDIT_STATES_KEY)
    if not isinstance(states, dict):
        states = {}
        st.session_state[EDIT_STATES_KEY] = states
    return states


def get_edit_state(entity_key: str) -> RowEditState:
    return _edit_states().get(entity_key, VIEWING)


def set_edit_state(entity_key: str, state: RowEditState) -> None:
    states = _edit_states()
    if state == VIEWING:
        states.pop(entity_key, None)
    else:
        states[entity_key] = state


def clear_edit_states() -> None:
    st.session_state[EDIT_STATES_KEY] = {}


# ========================================
# 결과
# ========================================


def get_inventory_result() -> Optional[InventoryResult]:
    result = st.session_state.get(INVENTORY_KEY)
    return result if isinstance(result, InventoryResult) else None


def set_inventory_result(result: InventoryResult) -> None:
    st.session_state[INVENTORY_KEY] = result


def get_inventory_attempt() -> Optional[Tuple[int, int]]:
    """Parameters of the last inventory fetch started, successful or not."""
    attempt = st.session_state.get(INVENTORY_ATTEMPT_KEY)
    return attempt if isinstance(attempt, tuple) else None


def set_inventory_attempt(lookback_days: int, lead_time_days: int) -> None:
    st.session_state[INVENTORY_ATTEMPT_KEY] = (lookback_days, lead_time_days)


def get_forecast_result() -> Optional[ForecastResult]:
    result = st.session_state.get(FORECAST_KEY)
    return result if isinstance(result, ForecastResult) else None


def set_forecast_result(result: ForecastResult) -> None:
    st.session_state[FORECAST_KEY] = result


# ========================================
# 에러 패널
# ========================================


def get_page_error(page: str) -> Optional[ErrorNotice]:
    notice = st.session_state.get(f"{ERROR_KEY_PREFIX}{page}")
    return notice if isinstance(notice, ErrorNotice) else None


def set_page_error(page: str, notice: ErrorNotice) -> None:
    st.session_state[f"{ERROR_KEY_PREFIX}{page}"] = notice


def clear_page_error(page: str) -> None:
    st.session_state.pop(f"{ERROR_KEY_PREFIX}{page}", None)
