"""
요청 순서 보장 테스트
"""
from __future__ import annotations

from bakery_dashboard.data_sources import RequestGate


def test_latest_issued_wins():
    gate = RequestGate("inventory")
    first = gate.begin()
    second = gate.begin()

    # the older response resolves last but must not be committed
    assert gate.accept(second) is True
    assert gate.accept(first) is False


def test_single_request_is_accepted():
    gate = RequestGate()
    token = gate.begin()
    assert gate.is_current(token)
    assert gate.accept(token)
    assert gate.latest == token


def test_gates_are_independent():
    inventory = RequestGate("inventory")
    forecast = RequestGate("forecast")
    token = inventory.begin()
    forecast.begin()
    forecast.begin()

    assert inventory.accept(token)
