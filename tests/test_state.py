"""
세션 상태 접근자 테스트

``st.session_state`` is replaced by a plain dict.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest

from app import state
from bakery_dashboard.domain import VIEWING, Editing, ExpansionState, SortState
from bakery_dashboard.ui.adapters import ErrorNotice


@pytest.fixture
def session():
    with patch("app.state.st") as mock_st:
        mock_st.session_state = {}
        yield mock_st.session_state


def test_api_client_is_rebuilt_when_url_changes(session):
    state.set_inventory_attempt(30, 7)
    first = state.get_api_client()
    assert state.get_api_client() is first

    assert state.set_api_base_url("http://other:3001/") is True
    second = state.get_api_client()

    assert second is not first
    assert second.base_url == "http://other:3001"
    assert state.get_inventory_attempt() is None
    assert state.set_api_base_url("http://other:3001") is False


def test_gate_persists_per_page(session):
    gate = state.get_gate("inventory")
    gate.begin()

    assert state.get_gate("inventory").latest == 1
    assert state.get_gate("forecast").latest == 0


def test_sort_state_default_and_update(session):
    assert state.get_sort_state("forecast", "total") == SortState("total")

    state.set_sort_state("forecast", SortState("min", "asc"))
    assert state.get_sort_state("forecast", "total") == SortState("min", "asc")


def test_expansion_is_shared_across_reruns(session):
    state.get_expansion("forecast").toggle("BAGEL")
    expansion = state.get_expansion("forecast")

    assert isinstance(expansion, ExpansionState)
    assert expansion.is_expanded("BAGEL")


def test_edit_states(session):
    assert state.get_edit_state("a") == VIEWING

    editing = Editing(draft_quantity="1", draft_threshold="")
    state.set_edit_state("a", editing)
    assert state.get_edit_state("a") == editing

    state.set_edit_state("a", VIEWING)
    assert state.get_edit_state("a") == VIEWING
    assert session[state.EDIT_STATES_KEY] == {}


def test_page_errors(session):
    notice = ErrorNotice("T", "M")
    state.set_page_error("inventory", notice)

    assert state.get_page_error("inventory") == notice
    assert state.get_page_error("forecast") is None

    state.clear_page_error("inventory")
    assert state.get_page_error("inventory") is None
