"""Configuration and constants for the bakery dashboard.

API 접속 정보, 재고/예측 기본값, UI 표시 설정을 제공합니다.
All settings are immutable; the backend address is passed explicitly to the
API client instead of living in module-level mutable state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

# ============================================================
# API 설정
# ============================================================

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_API_TIMEOUT = 30.0

API_URL_ENV = "BAKERY_API_URL"
API_TIMEOUT_ENV = "BAKERY_API_TIMEOUT"


@dataclass(frozen=True)
class ApiConfig:
    """Backend connection settings."""

    base_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_API_TIMEOUT

    def __post_init__(self) -> None:
        # Trailing slashes would double up when joined with endpoint paths
        object.__setattr__(self, "base_url", str(self.base_url).strip().rstrip("/"))

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """
        Build the API settings from environment variables.

        Environment:
            BAKERY_API_URL: backend base URL (default: http://localhost:3001)
            BAKERY_API_TIMEOUT: request timeout in seconds (default: 30)

        Returns:
            ApiConfig instance
        """
        base_url = os.getenv(API_URL_ENV) or DEFAULT_API_URL
        raw_timeout = os.getenv(API_TIMEOUT_ENV)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_API_TIMEOUT
        except ValueError:
            timeout = DEFAULT_API_TIMEOUT
        if timeout <= 0:
            timeout = DEFAULT_API_TIMEOUT
        return cls(base_url=base_url, timeout_seconds=timeout)

    def with_base_url(self, base_url: str) -> "ApiConfig":
        """Return a copy pointing at another backend."""
        return ApiConfig(base_url=base_url, timeout_seconds=self.timeout_seconds)


# ============================================================
# 재고 설정
# ============================================================

@dataclass(frozen=True)
class InventoryConfig:
    """Restock suggestion settings."""

    # 소비량 계산 기간 (일)
    default_lookback_days: int = 30
    min_lookback_days: int = 7
    max_lookback_days: int = 90

    # 유통업체 배송 리드타임 (일)
    default_lead_time_days: int = 7
    min_lead_time_days: int = 1
    max_lead_time_days: int = 30

    # 재주문 기준이 비어있을 때 사용할 기본값
    default_restock_threshold: int = 12


# ============================================================
# 예측 설정
# ============================================================

@dataclass(frozen=True)
class ForecastConfig:
    """Forecast request parameter defaults and bounds."""

    default_lookback_weeks: int = 4
    min_lookback_weeks: int = 1
    max_lookback_weeks: int = 12

    default_growth_rate: float = 1.0
    min_growth_rate: float = 0.8
    max_growth_rate: float = 1.5

    increments: Tuple[str, ...] = ("day", "week", "month")
    default_increment: str = "day"

    # 기간 프리셋 (일): next week / next month / next quarter
    horizon_presets: Tuple[Tuple[str, int], ...] = (
        ("Next week", 7),
        ("Next month", 30),
        ("Next quarter", 90),
    )
    default_horizon_days: int = 7


# ============================================================
# UI 설정
# ============================================================

@dataclass(frozen=True)
class UIConfig:
    """UI 표시 관련 설정"""

    # 기본 정렬 컬럼
    inventory_default_sort: str = "urgency"
    forecast_default_sort: str = "total"

    # 테이블 최대 표시 행 수
    max_table_rows: int = 1000

    # 상세 테이블 높이 (픽셀)
    table_height_detail: int = 320
    table_height_inventory: int = 420

    # 예측 차트 높이 (픽셀)
    chart_height: int = 400


@dataclass(frozen=True)
class DashboardConfig:
    """대시보드 전역 설정"""

    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    ui: UIConfig = field(default_factory=UIConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = DashboardConfig()
