"""
필터/정렬 뷰 엔진

Builds the displayed sequence of summaries or inventory rows from a text
filter and one active sort column. Inputs are never mutated: every call
returns a new list, so clearing the filter restores the original order.

Items may be objects (attribute lookup) or mappings (key lookup); both need
``display_name`` and ``entity_key`` for the text filter.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar

from bakery_dashboard.common.performance import measure_time

from .exceptions import FilterError

T = TypeVar("T")

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)

# Switching to a new column starts descending ("most urgent / largest first").
DEFAULT_SORT_DIRECTION = SORT_DESC

FILTER_FIELDS = ("display_name", "entity_key")


# ========================================
# 정렬 상태
# ========================================


@dataclass(frozen=True)
class SortState:
    """
    The single active ``(key, direction)`` pair.

    Examples:
        >>> state = SortState("total")
        >>> state.click("total").direction
        'asc'
        >>> state.click("total").click("average")
        SortState(key='average', direction='desc')
    """

    key: str
    direction: str = DEFAULT_SORT_DIRECTION

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise FilterError(f"unknown sort direction: {self.direction!r}")

    def toggled(self) -> "SortState":
        """Same key, opposite direction."""
        flipped = SORT_ASC if self.direction == SORT_DESC else SORT_DESC
        return SortState(self.key, flipped)

    def click(self, key: str) -> "SortState":
        """Header click: toggle the active key, or switch to *key* descending."""
        if key == self.key:
            return self.toggled()
        return SortState(key, DEFAULT_SORT_DIRECTION)

    @property
    def arrow(self) -> str:
        return "↑" if self.direction == SORT_ASC else "↓"


# ========================================
# 값 조회 헬퍼
# ========================================


def _lookup(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        if key not in item:
            raise FilterError(f"unknown sort/filter field: {key!r}")
        return item[key]
    try:
        return getattr(item, key)
    except AttributeError:
        raise FilterError(f"unknown sort/filter field: {key!r}") from None


def _is_null(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    # pd.NaT compares unequal to itself
    return value != value


def _is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


# ========================================
# 필터 / 정렬
# ========================================


def filter_items(items: Sequence[T], text: Optional[str]) -> List[T]:
    """
    Keep items whose display name or entity key contains *text*.

    Matching is case-insensitive; blank text keeps everything.

    Args:
        items: summaries or rows
        text: filter text from the search box

    Returns:
        New list in the input's relative order
    """
    needle = (text or "").strip().lower()
    if not needle:
        return list(items)

    matched: List[T] = []
    for item in items:
        for name in FILTER_FIELDS:
            value = _lookup(item, name)
            if value is not None and needle in str(value).lower():
                matched.append(item)
                break
    return matched


def sort_items(items: Iterable[T], key: str, direction: str = DEFAULT_SORT_DIRECTION) -> List[T]:
    """
    Stable sort on one column with nulls last in both directions.

    Numeric columns compare numerically; anything else compares as a
    case-sensitive string. Ties keep their input order.

    Raises:
        FilterError: unknown column or direction
    """
    if direction not in SORT_DIRECTIONS:
        raise FilterError(f"unknown sort direction: {direction!r}")

    present: List[tuple] = []
    missing: List[T] = []
    for item in items:
        value = _lookup(item, key)
        if _is_null(value):
            missing.append(item)
        else:
            present.append((value, item))

    if all(_is_numeric(value) for value, _ in present):
        ordered = sorted(present, key=lambda pair: float(pair[0]), reverse=direction == SORT_DESC)
    else:
        ordered = sorted(present, key=lambda pair: str(pair[0]), reverse=direction == SORT_DESC)

    return [item for _, item in ordered] + missing


@measure_time
def build_view(
    items: Sequence[T],
    filter_text: Optional[str],
    sort_state: Optional[SortState],
) -> List[T]:
    """
    Filter, then sort. ``sort_state=None`` keeps the input order.

    Examples:
        >>> view = build_view(list(summaries.values()), "bagel", SortState("total"))
    """
    filtered = filter_items(items, filter_text)
    if sort_state is None:
        return filtered
    return sort_items(filtered, sort_state.key, sort_state.direction)
