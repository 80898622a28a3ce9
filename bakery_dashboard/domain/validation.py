"""
입력 값 검증 로직

Client-side checks run before any request is sent: inline inventory edits,
the inventory page settings and the forecast parameter form. Failures raise
``ValidationError`` tagged with the offending field.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from bakery_dashboard.core.config import CONFIG, ForecastConfig, InventoryConfig

from .exceptions import ValidationError
from .models import ForecastRequest

logger = logging.getLogger(__name__)

FIELD_QUANTITY = "quantity"
FIELD_RESTOCK_THRESHOLD = "restock_threshold"

FIELD_LABELS = {
    FIELD_QUANTITY: "Quantity",
    FIELD_RESTOCK_THRESHOLD: "Restock threshold",
}


def parse_non_negative_int(
    text: object,
    field: str,
    *,
    allow_blank: bool = False,
) -> Optional[int]:
    """
    Parse a text input as a non-negative integer.

    Args:
        text: raw input (string from a text box, or a number)
        field: field name attached to the error
        allow_blank: return ``None`` for empty input instead of failing

    Returns:
        Parsed value, or ``None`` for blank input when allowed

    Raises:
        ValidationError: not a whole number, or negative

    Examples:
        >>> parse_non_negative_int("12", "quantity")
        12
        >>> parse_non_negative_int("", "restock_threshold", allow_blank=True) is None
        True
    """
    label = FIELD_LABELS.get(field, field)
    message = f"{label} must be a non-negative number"

    if text is None or (isinstance(text, str) and not text.strip()):
        if allow_blank:
            return None
        raise ValidationError(message, field=field)

    if isinstance(text, bool):
        raise ValidationError(message, field=field)

    if isinstance(text, int):
        value = text
    elif isinstance(text, float):
        if not text.is_integer():
            raise ValidationError(message, field=field)
        value = int(text)
    else:
        try:
            value = int(str(text).strip())
        except ValueError:
            raise ValidationError(message, field=field) from None

    if value < 0:
        raise ValidationError(message, field=field)
    return value


def _check_range(value: object, field: str, low: float, high: float, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number", field=field)
    if value < low or value > high:
        logger.debug(f"{field}={value} outside [{low}, {high}]")
        raise ValidationError(f"{label} must be between {low} and {high}", field=field)


def validate_lead_time(days: object, config: InventoryConfig = CONFIG.inventory) -> int:
    """Lead time in whole days within the configured bounds."""
    if not isinstance(days, int) or isinstance(days, bool):
        raise ValidationError("Lead time must be a whole number of days", field="lead_time_days")
    _check_range(
        days, "lead_time_days", config.min_lead_time_days, config.max_lead_time_days, "Lead time"
    )
    return days


def validate_lookback_days(days: object, config: InventoryConfig = CONFIG.inventory) -> int:
    """Consumption lookback in whole days within the configured bounds."""
    if not isinstance(days, int) or isinstance(days, bool):
        raise ValidationError("Lookback must be a whole number of days", field="lookback_days")
    _check_range(
        days,
        "lookback_days",
        config.min_lookback_days,
        config.max_lookback_days,
        "Lookback period",
    )
    return days


def build_forecast_request(
    *,
    start_date: dt.date,
    horizon_days: int,
    increment: str,
    growth_rate: float,
    lookback_weeks: int,
    config: ForecastConfig = CONFIG.forecast,
) -> ForecastRequest:
    """
    Validate the forecast form and build the request.

    The end date is inclusive: ``start + horizon - 1``.

    Raises:
        ValidationError: any parameter out of bounds
    """
    if not isinstance(start_date, dt.date):
        raise ValidationError("Start date is required", field="start_date")
    if isinstance(start_date, dt.datetime):
        start_date = start_date.date()

    if not isinstance(horizon_days, int) or isinstance(horizon_days, bool) or horizon_days < 1:
        raise ValidationError("Forecast horizon must be at least one day", field="horizon_days")

    if increment not in config.increments:
        raise ValidationError(
            f"Increment must be one of: {', '.join(config.increments)}", field="increment"
        )

    _check_range(
        growth_rate,
        "growth_rate",
        config.min_growth_rate,
        config.max_growth_rate,
        "Growth rate",
    )

    if not isinstance(lookback_weeks, int) or isinstance(lookback_weeks, bool):
        raise ValidationError("Lookback weeks must be a whole number", field="lookback_weeks")
    _check_range(
        lookback_weeks,
        "lookback_weeks",
        config.min_lookback_weeks,
        config.max_lookback_weeks,
        "Lookback weeks",
    )

    return ForecastRequest(
        start_date=start_date,
        end_date=start_date + dt.timedelta(days=horizon_days - 1),
        increment=increment,
        growth_rate=float(growth_rate),
        lookback_weeks=lookback_weeks,
    )
