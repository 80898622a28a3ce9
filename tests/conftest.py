import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config):
    """pytest 초기화 시점에 실행되어 테스트 수집 전에 환경을 준비합니다.

    API 클라이언트가 실제 백엔드 주소를 읽지 않도록 테스트용 URL을 고정합니다.
    """
    os.environ.setdefault("BAKERY_API_URL", "http://backend.test:3001")


@pytest.fixture
def forecast_payload():
    """``POST /api/forecast/generate`` response with two SKUs."""
    return {
        "success": True,
        "data": [
            {"sku": "BAGEL", "date": "2024-03-02", "forecast": 30, "dayOfWeek": "Saturday"},
            {"sku": "BAGEL", "date": "2024-03-01", "forecast": 10, "dayOfWeek": "Friday"},
            {"sku": "CROISSANT", "date": "2024-03-01", "forecast": 5, "baseAverage": 4},
        ],
        "dailyForecast": [
            {"sku": "BAGEL", "date": "2024-03-01", "forecast": 10},
            {"sku": "BAGEL", "date": "2024-03-02", "forecast": 30},
            {"sku": "CROISSANT", "date": "2024-03-01", "forecast": 5},
        ],
        "summary": {
            "totalForecast": 45,
            "uniqueSKUs": 2,
            "periods": 2,
            "averagePerPeriod": 22.5,
        },
        "cached": True,
    }
