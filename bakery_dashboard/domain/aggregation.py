"""
레코드 그룹 집계

Groups canonical records by entity key in a single pass. The output dict
keeps the order in which keys were first seen, so an unsorted table is
deterministic for a deterministic response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from bakery_dashboard.common.performance import measure_time

from .models import CanonicalRecord, GroupSummary


@dataclass
class _GroupAccumulator:
    entity_key: str
    display_name: str
    baseline: Optional[float]
    total: float = 0.0
    count: int = 0
    minimum: float = float("inf")
    maximum: float = float("-inf")
    first_period: str = ""
    last_period: str = ""
    members: List[CanonicalRecord] = field(default_factory=list)

    def add(self, record: CanonicalRecord) -> None:
        self.total += record.value
        self.count += 1
        self.minimum = min(self.minimum, record.value)
        self.maximum = max(self.maximum, record.value)
        # ISO dates compare correctly as strings
        if not self.first_period or record.period < self.first_period:
            self.first_period = record.period
        if not self.last_period or record.period > self.last_period:
            self.last_period = record.period
        self.members.append(record)

    def freeze(self) -> GroupSummary:
        return GroupSummary(
            entity_key=self.entity_key,
            display_name=self.display_name,
            total=self.total,
            count=self.count,
            min=self.minimum,
            max=self.maximum,
            date_range_start=self.first_period,
            date_range_end=self.last_period,
            baseline=self.baseline,
            members=tuple(self.members),
        )


@measure_time
def aggregate(records: Iterable[CanonicalRecord]) -> Dict[str, GroupSummary]:
    """
    Group records by ``entity_key`` and compute per-group statistics.

    Duplicate ``(entity_key, period)`` pairs are both counted; see
    ``find_duplicate_periods`` to surface them.

    Args:
        records: canonical records in response order

    Returns:
        ``{entity_key: GroupSummary}`` in first-seen key order

    Examples:
        >>> summaries = aggregate([
        ...     CanonicalRecord("A", "A", "2024-01-01", 10.0),
        ...     CanonicalRecord("A", "A", "2024-01-02", 30.0),
        ... ])
        >>> summaries["A"].total, summaries["A"].average
        (40.0, 20.0)
    """
    groups: Dict[str, _GroupAccumulator] = {}

    for record in records:
        group = groups.get(record.entity_key)
        if group is None:
            # Name and baseline come from the first member seen
            group = _GroupAccumulator(
                entity_key=record.entity_key,
                display_name=record.display_name,
                baseline=record.baseline,
            )
            groups[record.entity_key] = group
        group.add(record)

    return {key: group.freeze() for key, group in groups.items()}


def grand_total(summaries: Iterable[GroupSummary]) -> float:
    """Sum of ``total`` over *summaries*."""
    return sum(summary.total for summary in summaries)


def find_duplicate_periods(
    summaries: Iterable[GroupSummary],
) -> List[Tuple[str, str]]:
    """
    List ``(entity_key, period)`` pairs that occur more than once.

    The aggregator sums duplicates rather than dropping them; the forecast
    page uses this to warn when that happened.
    """
    duplicates: List[Tuple[str, str]] = []
    for summary in summaries:
        seen: set[str] = set()
        reported: set[str] = set()
        for member in summary.members:
            if member.period in seen and member.period not in reported:
                duplicates.append((summary.entity_key, member.period))
                reported.add(member.period)
            seen.add(member.period)
    return duplicates
