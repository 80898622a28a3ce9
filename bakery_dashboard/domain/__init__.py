"""
도메인 계층 퍼블릭 API

Re-exports the domain classes and functions so pages import from one place.
Nothing in this package depends on Streamlit.
"""
from __future__ import annotations

from .aggregation import aggregate, find_duplicate_periods, grand_total
from .classification import build_inventory_rows, classify, status_counts
from .editing import (
    VIEWING,
    Editing,
    Failed,
    RowEditState,
    Saving,
    Viewing,
    begin_edit,
    cancel,
    retry,
    save_failed,
    save_succeeded,
    submit,
    update_draft,
)
from .exceptions import (
    ApiError,
    ApplicationError,
    DomainError,
    EditStateError,
    FilterError,
    MalformedRecord,
    TransportError,
    ValidationError,
)
from .expansion import ExpansionState, chronological_members
from .filters import (
    SORT_ASC,
    SORT_DESC,
    SortState,
    build_view,
    filter_items,
    sort_items,
)
from .models import (
    STATUS_LOW,
    STATUS_NO_INVENTORY,
    STATUS_OK,
    STATUS_REORDER_SOON,
    CanonicalRecord,
    Classification,
    ForecastRequest,
    ForecastResult,
    ForecastSummary,
    GroupSummary,
    InventoryPosition,
    InventoryRow,
    NormalizationResult,
)
from .normalization import (
    normalize_forecast_response,
    normalize_inventory_position,
    normalize_inventory_positions,
    normalize_record,
    normalize_records,
    unwrap_envelope,
)
from .validation import (
    build_forecast_request,
    parse_non_negative_int,
    validate_lead_time,
    validate_lookback_days,
)

__all__ = [
    # 예외
    "DomainError",
    "MalformedRecord",
    "ValidationError",
    "FilterError",
    "EditStateError",
    "ApiError",
    "TransportError",
    "ApplicationError",
    # 모델
    "CanonicalRecord",
    "NormalizationResult",
    "GroupSummary",
    "InventoryPosition",
    "Classification",
    "InventoryRow",
    "ForecastRequest",
    "ForecastSummary",
    "ForecastResult",
    "STATUS_LOW",
    "STATUS_REORDER_SOON",
    "STATUS_OK",
    "STATUS_NO_INVENTORY",
    # 정규화
    "normalize_record",
    "normalize_records",
    "normalize_inventory_position",
    "normalize_inventory_positions",
    "normalize_forecast_response",
    "unwrap_envelope",
    # 집계
    "aggregate",
    "grand_total",
    "find_duplicate_periods",
    # 분류
    "classify",
    "build_inventory_rows",
    "status_counts",
    # 뷰
    "SortState",
    "SORT_ASC",
    "SORT_DESC",
    "filter_items",
    "sort_items",
    "build_view",
    "ExpansionState",
    "chronological_members",
    # 편집
    "RowEditState",
    "Viewing",
    "Editing",
    "Saving",
    "Failed",
    "VIEWING",
    "begin_edit",
    "update_draft",
    "submit",
    "save_succeeded",
    "save_failed",
    "retry",
    "cancel",
    # 검증
    "parse_non_negative_int",
    "validate_lead_time",
    "validate_lookback_days",
    "build_forecast_request",
]
