"""
도메인 모델: 대시보드의 핵심 데이터 구조

Every model is a frozen dataclass. Summaries and rows are derived values,
rebuilt from the last API response whenever a parameter changes; nothing here
is mutated in place.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import pandas as pd

from .exceptions import ValidationError

ExtraValue = Union[float, str]

# ============================================================
# 재고 상태
# ============================================================

STATUS_LOW = "low"
STATUS_REORDER_SOON = "reorder_soon"
STATUS_OK = "ok"
STATUS_NO_INVENTORY = "no_inventory"

STATUSES = (STATUS_LOW, STATUS_REORDER_SOON, STATUS_OK, STATUS_NO_INVENTORY)

# Higher is more urgent; drives the default "most urgent first" ordering.
STATUS_URGENCY: Dict[str, int] = {
    STATUS_LOW: 3,
    STATUS_REORDER_SOON: 2,
    STATUS_NO_INVENTORY: 1,
    STATUS_OK: 0,
}


@dataclass(frozen=True)
class CanonicalRecord:
    """
    One observation for one entity at one point or period in time.

    Attributes:
        entity_key: stable group identifier (SKU, name or item GUID)
        display_name: label shown in tables
        period: ISO date (``YYYY-MM-DD``); sorts correctly as a string
        value: forecast quantity or stock reading
        baseline: optional comparison value such as the historical average
        extra: optional display-only fields (day of week, pattern, ...)
    """

    entity_key: str
    display_name: str
    period: str
    value: float
    baseline: Optional[float] = None
    extra: Mapping[str, ExtraValue] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizationResult:
    """Records that survived normalization plus the count of skipped ones."""

    records: Tuple[CanonicalRecord, ...]
    skipped: int = 0


@dataclass(frozen=True)
class GroupSummary:
    """
    Aggregate statistics for all records sharing one entity key.

    ``members`` keeps the order the records arrived in; use
    ``domain.expansion.chronological_members`` for the detail view.
    """

    entity_key: str
    display_name: str
    total: float
    count: int
    min: float
    max: float
    date_range_start: str
    date_range_end: str
    baseline: Optional[float]
    members: Tuple[CanonicalRecord, ...]

    @property
    def average(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total / self.count

    @property
    def date_range(self) -> str:
        if not self.date_range_start:
            return "-"
        return f"{self.date_range_start} to {self.date_range_end}"

    @property
    def growth_pct(self) -> Optional[float]:
        """Average vs baseline in percent, ``None`` without a positive baseline."""
        if self.baseline is None or self.baseline <= 0:
            return None
        return (self.average - self.baseline) / self.baseline * 100.0


@dataclass(frozen=True)
class InventoryPosition:
    """
    Live stock snapshot for one entity.

    ``restock_threshold`` may be ``None`` only before defaults are applied;
    the normalizer fills it in from configuration. Negative quantities and
    non-positive lead times are rejected here, before classification.
    """

    entity_key: str
    display_name: str
    current_quantity: int
    restock_threshold: Optional[int]
    daily_consumption_rate: float
    lead_time_days: int
    last_updated: Optional[pd.Timestamp] = None

    def __post_init__(self) -> None:
        if self.current_quantity < 0:
            raise ValidationError(
                f"current quantity must be non-negative (got {self.current_quantity})",
                field="current_quantity",
            )
        if self.restock_threshold is not None and self.restock_threshold < 0:
            raise ValidationError(
                f"restock threshold must be non-negative (got {self.restock_threshold})",
                field="restock_threshold",
            )
        if self.daily_consumption_rate < 0:
            raise ValidationError(
                "daily consumption rate must be non-negative "
                f"(got {self.daily_consumption_rate})",
                field="daily_consumption_rate",
            )
        if self.lead_time_days <= 0:
            raise ValidationError(
                f"lead time must be positive (got {self.lead_time_days})",
                field="lead_time_days",
            )


@dataclass(frozen=True)
class Classification:
    """Status derived from an ``InventoryPosition``."""

    status: str
    days_until_restock: Optional[float]
    suggested_order_quantity: int


@dataclass(frozen=True)
class InventoryRow:
    """
    Flat, sortable inventory table row: a position and its classification.

    Attribute names double as sort keys for the view engine.
    """

    entity_key: str
    display_name: str
    current_quantity: int
    restock_threshold: Optional[int]
    daily_consumption_rate: float
    days_until_restock: Optional[float]
    suggested_order_quantity: int
    status: str
    urgency: int
    last_updated: Optional[pd.Timestamp]
    position: InventoryPosition = field(compare=False, repr=False)


# ============================================================
# 예측 요청/응답
# ============================================================


@dataclass(frozen=True)
class ForecastRequest:
    """Validated forecast generation parameters."""

    start_date: dt.date
    end_date: dt.date
    increment: str
    growth_rate: float
    lookback_weeks: int

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for ``POST /api/forecast/generate``."""
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "increment": self.increment,
            "growthRate": self.growth_rate,
            "lookbackWeeks": self.lookback_weeks,
        }


@dataclass(frozen=True)
class ForecastSummary:
    """Server-computed headline numbers; any of them may be missing."""

    total_forecast: Optional[float] = None
    unique_skus: Optional[int] = None
    periods: Optional[int] = None
    average_per_period: Optional[float] = None


@dataclass(frozen=True)
class ForecastResult:
    """
    Normalized forecast response.

    Attributes:
        summary: headline numbers, ``None`` when the server sent none
        daily_records: per-period records (chart)
        table_records: per-period records for the SKU summary table
        cached: the server answered from its forecast cache
        skipped: malformed records dropped from the list shown in the table
    """

    summary: Optional[ForecastSummary]
    daily_records: Tuple[CanonicalRecord, ...]
    table_records: Tuple[CanonicalRecord, ...]
    cached: bool = False
    skipped: int = 0
