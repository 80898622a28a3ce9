"""
데이터 정규화 유틸리티

The backend spells the same quantity several ways depending on the endpoint
(``forecast`` vs ``value``, ``date`` vs ``period``, ``sku`` vs ``itemGuid``).
This module resolves those spellings once, at the boundary, into the
canonical models. Nothing past this module ever sees a raw payload dict.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .exceptions import MalformedRecord
from .models import (
    CanonicalRecord,
    ExtraValue,
    ForecastResult,
    ForecastSummary,
    InventoryPosition,
    NormalizationResult,
)

logger = logging.getLogger(__name__)


# Field-name priority chains observed across the forecast, velocity and
# inventory endpoints. The first present, non-empty value wins.
RECORD_FIELD_ALIASES: dict[str, Sequence[str]] = {
    "entity_key": ("sku", "displayName", "itemGuid"),
    "display_name": ("displayName", "sku", "itemGuid"),
    "period": ("date", "period"),
    "value": ("forecast", "value", "quantity", "totalQuantity"),
    "baseline": ("baseAverage", "baseline"),
}

# Display-only fields carried into ``CanonicalRecord.extra`` when present.
EXTRA_FIELDS: Tuple[str, ...] = ("dayOfWeek", "pattern", "increment")

INVENTORY_FIELD_ALIASES: dict[str, Sequence[str]] = {
    # The save endpoint is addressed by item GUID, so it leads the chain here.
    "entity_key": ("itemGuid", "sku", "displayName"),
    "display_name": ("displayName", "sku", "itemGuid"),
    "current_quantity": ("currentQuantity", "quantity"),
    "restock_threshold": ("restockThreshold",),
    "daily_consumption_rate": ("dailyConsumption", "dailyConsumptionRate"),
    "last_updated": ("lastUpdated", "updatedAt", "createdAt"),
}


# ========================================
# 값 변환 헬퍼
# ========================================


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _first_present(raw: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """Return the first non-missing value among *aliases*, else ``None``."""

    for alias in aliases:
        value = raw.get(alias)
        if not _is_missing(value):
            return value
    return None


def _coerce_number(value: Any) -> Optional[float]:
    """Convert *value* to a finite float; ``None`` when it is not a number.

    Zero is a real value and is returned as ``0.0``, never treated as absent.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _coerce_int(value: Any) -> Optional[int]:
    """Convert *value* to an int when it is integral; ``None`` otherwise."""

    number = _coerce_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


_MONTH_PERIOD = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def _coerce_period(value: Any) -> Optional[str]:
    """Parse a date-like value into an ISO ``YYYY-MM-DD`` string.

    Month labels (``YYYY-MM``) are kept as they are.
    """

    if isinstance(value, str) and _MONTH_PERIOD.match(value.strip()):
        return value.strip()
    if isinstance(value, bool) or isinstance(value, (int, float)):
        # Bare numbers would be read as epoch offsets.
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.strftime("%Y-%m-%d")


def _coerce_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if _is_missing(value):
        return None
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return None
    return ts


def _collect_extra(raw: Mapping[str, Any]) -> dict[str, ExtraValue]:
    extra: dict[str, ExtraValue] = {}
    for name in EXTRA_FIELDS:
        value = raw.get(name)
        if _is_missing(value) or isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            number = _coerce_number(value)
            if number is not None:
                extra[name] = number
        else:
            extra[name] = str(value)
    return extra


# ========================================
# 레코드 정규화
# ========================================


def normalize_record(raw: Mapping[str, Any]) -> CanonicalRecord:
    """
    Map one raw per-period record onto ``CanonicalRecord``.

    Args:
        raw: record dict as received from the API

    Returns:
        Canonical record

    Raises:
        MalformedRecord: no usable entity key, period or value

    Examples:
        >>> normalize_record({"sku": "CROISSANT", "date": "2024-03-01", "forecast": 42})
        CanonicalRecord(entity_key='CROISSANT', display_name='CROISSANT', ...)
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecord(
            f"record must be an object, got {type(raw).__name__}", record=raw
        )

    key = _first_present(raw, RECORD_FIELD_ALIASES["entity_key"])
    if key is None:
        raise MalformedRecord("record has no sku, displayName or itemGuid", record=raw)
    entity_key = str(key).strip()

    raw_period = _first_present(raw, RECORD_FIELD_ALIASES["period"])
    period = _coerce_period(raw_period) if raw_period is not None else None
    if period is None:
        raise MalformedRecord(
            f"record {entity_key!r} has no usable date or period", record=raw
        )

    value = _coerce_number(_first_present(raw, RECORD_FIELD_ALIASES["value"]))
    if value is None:
        raise MalformedRecord(
            f"record {entity_key!r} ({period}) has no usable value", record=raw
        )

    name = _first_present(raw, RECORD_FIELD_ALIASES["display_name"])
    display_name = str(name).strip() if name is not None else entity_key

    baseline = _coerce_number(_first_present(raw, RECORD_FIELD_ALIASES["baseline"]))

    return CanonicalRecord(
        entity_key=entity_key,
        display_name=display_name,
        period=period,
        value=value,
        baseline=baseline,
        extra=_collect_extra(raw),
    )


def normalize_records(raws: Optional[Iterable[Any]]) -> NormalizationResult:
    """
    Normalize a batch, skipping malformed records.

    A partial view beats no view: a single bad record is dropped and counted
    instead of failing the whole response.

    Args:
        raws: raw record dicts (``None`` is treated as empty)

    Returns:
        NormalizationResult with the surviving records in input order
    """
    records: List[CanonicalRecord] = []
    skipped = 0
    for raw in raws or ():
        try:
            records.append(normalize_record(raw))
        except MalformedRecord as exc:
            skipped += 1
            logger.debug(f"Skipping malformed record: {exc}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed record(s) of {skipped + len(records)}")

    return NormalizationResult(records=tuple(records), skipped=skipped)


# ========================================
# 재고 정규화
# ========================================


def normalize_inventory_position(
    raw: Mapping[str, Any],
    *,
    lead_time_days: int,
    default_threshold: int,
) -> InventoryPosition:
    """
    Map one raw inventory row onto ``InventoryPosition``.

    A missing restock threshold is replaced by *default_threshold* before
    classification; a negative or non-integer quantity is rejected here so
    the classifier never sees it.

    Args:
        raw: row dict from ``GET /api/inventory``
        lead_time_days: lead time shared by every position in the view
        default_threshold: threshold used when the row has none

    Returns:
        Inventory position

    Raises:
        MalformedRecord: unusable key or quantity fields
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecord(
            f"inventory row must be an object, got {type(raw).__name__}", record=raw
        )

    key = _first_present(raw, INVENTORY_FIELD_ALIASES["entity_key"])
    if key is None:
        raise MalformedRecord("inventory row has no itemGuid, sku or displayName", record=raw)
    entity_key = str(key).strip()

    quantity = _coerce_int(_first_present(raw, INVENTORY_FIELD_ALIASES["current_quantity"]))
    if quantity is None or quantity < 0:
        raise MalformedRecord(
            f"inventory row {entity_key!r} needs a non-negative integer quantity",
            record=raw,
        )

    raw_threshold = _first_present(raw, INVENTORY_FIELD_ALIASES["restock_threshold"])
    if raw_threshold is None:
        threshold = default_threshold
    else:
        threshold = _coerce_int(raw_threshold)
        if threshold is None or threshold < 0:
            raise MalformedRecord(
                f"inventory row {entity_key!r} has an invalid restock threshold",
                record=raw,
            )

    raw_rate = _first_present(raw, INVENTORY_FIELD_ALIASES["daily_consumption_rate"])
    rate = _coerce_number(raw_rate) if raw_rate is not None else 0.0
    if rate is None or rate < 0:
        raise MalformedRecord(
            f"inventory row {entity_key!r} has an invalid daily consumption",
            record=raw,
        )

    name = _first_present(raw, INVENTORY_FIELD_ALIASES["display_name"])

    return InventoryPosition(
        entity_key=entity_key,
        display_name=str(name).strip() if name is not None else entity_key,
        current_quantity=quantity,
        restock_threshold=threshold,
        daily_consumption_rate=rate,
        lead_time_days=lead_time_days,
        last_updated=_coerce_timestamp(
            _first_present(raw, INVENTORY_FIELD_ALIASES["last_updated"])
        ),
    )


def normalize_inventory_positions(
    raws: Optional[Iterable[Any]],
    *,
    lead_time_days: int,
    default_threshold: int,
) -> Tuple[List[InventoryPosition], int]:
    """
    Normalize every inventory row, skipping malformed ones.

    Returns:
        (positions in input order, skipped count)
    """
    positions: List[InventoryPosition] = []
    skipped = 0
    for raw in raws or ():
        try:
            positions.append(
                normalize_inventory_position(
                    raw,
                    lead_time_days=lead_time_days,
                    default_threshold=default_threshold,
                )
            )
        except MalformedRecord as exc:
            skipped += 1
            logger.debug(f"Skipping malformed inventory row: {exc}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed inventory row(s)")

    return positions, skipped


# ========================================
# 응답 정규화
# ========================================


def unwrap_envelope(payload: Any) -> list:
    """
    Return the record list from a ``{"success": ..., "data": [...]}`` wrapper.

    Bare lists are returned unchanged.

    Raises:
        MalformedRecord: the payload carries no record list
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if data is None and "data" in payload:
            return []
    raise MalformedRecord("response does not contain a record list", record=payload)


def _normalize_summary(raw: Any) -> Optional[ForecastSummary]:
    if not isinstance(raw, Mapping):
        return None
    return ForecastSummary(
        total_forecast=_coerce_number(raw.get("totalForecast")),
        unique_skus=_coerce_int(raw.get("uniqueSKUs")),
        periods=_coerce_int(raw.get("periods")),
        average_per_period=_coerce_number(raw.get("averagePerPeriod")),
    )


def normalize_forecast_response(payload: Any) -> ForecastResult:
    """
    Normalize a ``POST /api/forecast/generate`` response.

    ``data`` feeds the SKU summary table and ``dailyForecast`` the chart;
    when ``data`` is absent the table falls back to ``dailyForecast``.

    Raises:
        MalformedRecord: the payload is not an object
    """
    if not isinstance(payload, Mapping):
        raise MalformedRecord("forecast response must be an object", record=payload)

    raw_daily = payload.get("dailyForecast")
    daily = normalize_records(raw_daily if isinstance(raw_daily, list) else [])

    raw_table = payload.get("data")
    if isinstance(raw_table, list):
        table = normalize_records(raw_table)
    else:
        table = NormalizationResult(records=daily.records, skipped=daily.skipped)

    return ForecastResult(
        summary=_normalize_summary(payload.get("summary")),
        daily_records=daily.records,
        table_records=table.records,
        cached=bool(payload.get("cached", False)),
        skipped=table.skipped,
    )
