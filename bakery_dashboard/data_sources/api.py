"""
백엔드 API 클라이언트

Thin ``requests`` wrapper around the bakery backend. It knows the endpoint
paths and the error envelope, and nothing about how records are aggregated:
responses come back as decoded JSON for the domain normalizers.

Failure modes:
- no response at all (refused, DNS, timeout) -> ``TransportError`` with
  remediation steps naming the configured backend URL
- non-2xx with ``{"error": {"message", "details"}}`` -> ``ApplicationError``
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests

from bakery_dashboard.common.performance import measure_time_context
from bakery_dashboard.core.config import ApiConfig
from bakery_dashboard.domain.exceptions import ApplicationError, TransportError
from bakery_dashboard.domain.models import ForecastRequest
from bakery_dashboard.domain.normalization import unwrap_envelope

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/api/inventory"
FORECAST_GENERATE_PATH = "/api/forecast/generate"
HEALTH_PATH = "/health"

DEFAULT_ERROR_MESSAGE = "An error occurred"

STATUS_LOG_LABELS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Server Error",
}


def transport_error_message(base_url: str) -> str:
    """User-facing text for "the server could not be reached"."""
    return (
        f"Cannot connect to backend server at {base_url}. Please check:\n"
        "1. The backend server is running\n"
        "2. You're on the same network as the server\n"
        f"3. The backend URL is correct (currently: {base_url})\n"
        "4. Firewall settings allow connections"
    )


def _error_from_response(response: requests.Response) -> ApplicationError:
    """Build an ``ApplicationError`` from a non-2xx response."""

    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None

    message: Optional[str] = None
    details: Any = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            details = error.get("details")
        elif isinstance(error, str):
            message = error

    if details is not None and not isinstance(details, (str, list)):
        details = json.dumps(details)
    elif isinstance(details, list):
        details = [str(item) for item in details]

    label = STATUS_LOG_LABELS.get(status, "API Error")
    logger.error(f"{label} ({status}) from {response.url}: {body!r}")

    return ApplicationError(
        str(message) if message else DEFAULT_ERROR_MESSAGE,
        status=status,
        details=details,
    )


class BakeryApiClient:
    """
    HTTP client for the inventory, forecast and health endpoints.

    The backend address comes from the injected ``ApiConfig``; switching
    backends means building a new client.

    Examples:
        >>> client = BakeryApiClient(ApiConfig.from_env())
        >>> rows = client.get_inventory(lookback_days=30, lead_time_days=7)
    """

    def __init__(
        self,
        config: ApiConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self._url(path)
        logger.debug(f"{method} {url} params={params}")

        with measure_time_context(f"{method} {path}"):
            try:
                response = self._session.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    timeout=self.config.timeout_seconds,
                )
            except (requests.ConnectionError, requests.Timeout) as exc:
                logger.error(f"No response from {url}: {exc}")
                raise TransportError(
                    transport_error_message(self.config.base_url),
                    base_url=self.config.base_url,
                ) from exc
            except requests.RequestException as exc:
                logger.error(f"Request setup error for {url}: {exc}")
                raise TransportError(str(exc), base_url=self.config.base_url) from exc

        if not response.ok:
            raise _error_from_response(response)

        try:
            return response.json()
        except ValueError as exc:
            raise ApplicationError(
                "Backend returned a response that is not JSON",
                status=response.status_code,
            ) from exc

    # ========================================
    # 재고
    # ========================================

    def get_inventory(self, *, lookback_days: int, lead_time_days: int) -> list:
        """``GET /api/inventory`` -> raw inventory rows."""
        payload = self._request(
            "GET",
            INVENTORY_PATH,
            params={"lookbackDays": lookback_days, "leadTimeDays": lead_time_days},
        )
        rows = unwrap_envelope(payload)
        logger.info(f"Fetched {len(rows)} inventory row(s)")
        return rows

    def update_inventory(
        self,
        entity_key: str,
        *,
        quantity: int,
        restock_threshold: Optional[int],
    ) -> Any:
        """``PUT /api/inventory/{key}``; a ``None`` threshold means "automatic"."""
        path = f"{INVENTORY_PATH}/{quote(str(entity_key), safe='')}"
        payload = self._request(
            "PUT",
            path,
            payload={"quantity": quantity, "restockThreshold": restock_threshold},
        )
        logger.info(
            f"Saved inventory for {entity_key}: quantity={quantity}, "
            f"restockThreshold={restock_threshold}"
        )
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    # ========================================
    # 예측
    # ========================================

    def generate_forecast(self, request: ForecastRequest) -> Dict[str, Any]:
        """``POST /api/forecast/generate`` -> raw forecast response."""
        payload = self._request("POST", FORECAST_GENERATE_PATH, payload=request.to_payload())
        if not isinstance(payload, dict):
            raise ApplicationError(
                "Forecast response has an unexpected shape", status=200
            )
        return payload

    # ========================================
    # 연결 진단
    # ========================================

    def health(self) -> Dict[str, Any]:
        """``GET /health`` -> ``{"status", "database", ...}``."""
        payload = self._request("GET", HEALTH_PATH)
        return payload if isinstance(payload, dict) else {}

    def check_connection(self) -> Tuple[bool, str]:
        """
        Connectivity diagnostic for the sidebar.

        Returns:
            (connected, message); never raises
        """
        try:
            info = self.health()
        except TransportError as exc:
            return False, f"Connection failed: {exc.message}"
        except ApplicationError as exc:
            return False, f"Server responded with status {exc.status}"
        database = info.get("database", "unknown")
        return True, f"Connected! Database: {database}"
