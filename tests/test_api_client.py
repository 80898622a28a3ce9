"""
백엔드 API 클라이언트 테스트

The HTTP session is mocked; these tests pin paths, payloads and the split
between transport and application failures.
"""
from __future__ import annotations

import datetime as dt
from unittest.mock import Mock

import pytest
import requests

from bakery_dashboard.core.config import ApiConfig
from bakery_dashboard.data_sources import BakeryApiClient, transport_error_message
from bakery_dashboard.domain import (
    ApplicationError,
    ForecastRequest,
    MalformedRecord,
    TransportError,
)

BASE_URL = "http://bakery.local:3001"


def _response(status=200, body=None, *, json_error=False):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.url = f"{BASE_URL}/x"
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def client(session):
    return BakeryApiClient(ApiConfig(base_url=BASE_URL + "/", timeout_seconds=5), session=session)


def test_trailing_slash_is_stripped(client):
    assert client.base_url == BASE_URL


def test_get_inventory(client, session):
    session.request.return_value = _response(body={"success": True, "data": [{"itemGuid": "a"}]})

    rows = client.get_inventory(lookback_days=30, lead_time_days=7)

    assert rows == [{"itemGuid": "a"}]
    session.request.assert_called_once_with(
        "GET",
        f"{BASE_URL}/api/inventory",
        params={"lookbackDays": 30, "leadTimeDays": 7},
        json=None,
        timeout=5,
    )


def test_get_inventory_without_record_list(client, session):
    session.request.return_value = _response(body={"success": True})
    with pytest.raises(MalformedRecord):
        client.get_inventory(lookback_days=30, lead_time_days=7)


def test_update_inventory(client, session):
    session.request.return_value = _response(body={"success": True, "data": {"quantity": 12}})

    data = client.update_inventory("guid/1", quantity=12, restock_threshold=None)

    assert data == {"quantity": 12}
    args, kwargs = session.request.call_args
    assert args == ("PUT", f"{BASE_URL}/api/inventory/guid%2F1")
    assert kwargs["json"] == {"quantity": 12, "restockThreshold": None}


def test_generate_forecast(client, session):
    session.request.return_value = _response(body={"data": [], "cached": False})
    request = ForecastRequest(dt.date(2024, 3, 1), dt.date(2024, 3, 7), "day", 1.0, 4)

    payload = client.generate_forecast(request)

    assert payload == {"data": [], "cached": False}
    args, kwargs = session.request.call_args
    assert args == ("POST", f"{BASE_URL}/api/forecast/generate")
    assert kwargs["json"]["startDate"] == "2024-03-01"
    assert kwargs["json"]["endDate"] == "2024-03-07"


class TestFailures:
    @pytest.mark.parametrize(
        "exc", [requests.ConnectionError("refused"), requests.Timeout("slow")]
    )
    def test_no_response_is_transport_error(self, client, session, exc):
        session.request.side_effect = exc

        with pytest.raises(TransportError) as exc_info:
            client.get_inventory(lookback_days=30, lead_time_days=7)

        assert exc_info.value.message == transport_error_message(BASE_URL)
        assert exc_info.value.base_url == BASE_URL
        assert f"Cannot connect to backend server at {BASE_URL}" in exc_info.value.message

    def test_other_request_errors(self, client, session):
        session.request.side_effect = requests.exceptions.InvalidURL("bad url")

        with pytest.raises(TransportError) as exc_info:
            client.health()
        assert "bad url" in exc_info.value.message

    def test_error_envelope_is_application_error(self, client, session):
        session.request.return_value = _response(
            400,
            {"error": {"message": "Invalid quantity", "details": ["must be >= 0"]}},
        )

        with pytest.raises(ApplicationError) as exc_info:
            client.update_inventory("a", quantity=1, restock_threshold=2)

        error = exc_info.value
        assert error.status == 400
        assert error.message == "Invalid quantity"
        assert error.detail_lines() == ["must be >= 0"]
        assert not isinstance(error, TransportError)

    def test_object_details_are_serialized(self, client, session):
        session.request.return_value = _response(
            500, {"error": {"message": "boom", "details": {"field": "x"}}}
        )
        with pytest.raises(ApplicationError) as exc_info:
            client.health()
        assert exc_info.value.detail_lines() == ['{"field": "x"}']

    def test_missing_envelope_uses_default_message(self, client, session):
        session.request.return_value = _response(502, json_error=True)
        with pytest.raises(ApplicationError) as exc_info:
            client.health()
        assert exc_info.value.message == "An error occurred"
        assert exc_info.value.status == 502

    def test_non_json_success(self, client, session):
        session.request.return_value = _response(200, json_error=True)
        with pytest.raises(ApplicationError):
            client.get_inventory(lookback_days=30, lead_time_days=7)


class TestCheckConnection:
    def test_connected(self, client, session):
        session.request.return_value = _response(body={"status": "ok", "database": "connected"})
        assert client.check_connection() == (True, "Connected! Database: connected")

    def test_server_error(self, client, session):
        session.request.return_value = _response(503, {"error": {"message": "down"}})
        assert client.check_connection() == (False, "Server responded with status 503")

    def test_unreachable(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        connected, message = client.check_connection()
        assert connected is False
        assert message.startswith("Connection failed: Cannot connect to backend server")


def test_api_config_from_env(monkeypatch):
    monkeypatch.setenv("BAKERY_API_URL", "http://10.0.0.5:3001/")
    monkeypatch.setenv("BAKERY_API_TIMEOUT", "not-a-number")

    config = ApiConfig.from_env()

    assert config.base_url == "http://10.0.0.5:3001"
    assert config.timeout_seconds == 30.0
