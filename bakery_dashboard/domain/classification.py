"""
재고 상태 분류

Derives a restock status, a "days until restock" projection and a suggested
order quantity from an inventory position.

Rules, in precedence order:

1. No consumption (rate <= 0): no projection; ``no_inventory`` when the shelf
   is empty, otherwise ``ok``.
2. days = max(0, (quantity - threshold) / rate)
3. ``low`` when quantity <= threshold, ``reorder_soon`` when
   days <= lead time, otherwise ``ok``.
4. suggested = max(0, round(threshold + rate * lead_time - quantity))

Days are kept unrounded; rounding to one decimal happens only for display.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable, List

from .models import (
    STATUS_LOW,
    STATUS_NO_INVENTORY,
    STATUS_OK,
    STATUS_REORDER_SOON,
    STATUS_URGENCY,
    STATUSES,
    Classification,
    InventoryPosition,
    InventoryRow,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def suggested_order_quantity(position: InventoryPosition) -> int:
    """
    Quantity needed to reach "threshold plus one lead time of consumption".

    Never negative.
    """
    threshold = position.restock_threshold or 0
    target = threshold + position.daily_consumption_rate * position.lead_time_days
    return max(0, _round_half_up(target - position.current_quantity))


def classify(position: InventoryPosition) -> Classification:
    """
    Classify one inventory position.

    Args:
        position: validated inventory position

    Returns:
        Classification with status, unrounded days until restock (``None``
        when there is no consumption) and suggested order quantity

    Examples:
        >>> classify(InventoryPosition("A", "A", 50, 20, 10.0, 7))
        Classification(status='reorder_soon', days_until_restock=3.0, suggested_order_quantity=40)
    """
    suggested = suggested_order_quantity(position)
    rate = position.daily_consumption_rate

    if rate <= 0:
        status = STATUS_NO_INVENTORY if position.current_quantity == 0 else STATUS_OK
        return Classification(
            status=status,
            days_until_restock=None,
            suggested_order_quantity=suggested,
        )

    threshold = position.restock_threshold or 0
    days = max(0.0, (position.current_quantity - threshold) / rate)

    if position.current_quantity <= threshold:
        status = STATUS_LOW
    elif days <= position.lead_time_days:
        status = STATUS_REORDER_SOON
    else:
        status = STATUS_OK

    return Classification(
        status=status,
        days_until_restock=days,
        suggested_order_quantity=suggested,
    )


def build_inventory_rows(positions: Iterable[InventoryPosition]) -> List[InventoryRow]:
    """
    Classify every position and flatten it into a sortable table row.

    Row order follows *positions*.
    """
    rows: List[InventoryRow] = []
    for position in positions:
        result = classify(position)
        rows.append(
            InventoryRow(
                entity_key=position.entity_key,
                display_name=position.display_name,
                current_quantity=position.current_quantity,
                restock_threshold=position.restock_threshold,
                daily_consumption_rate=position.daily_consumption_rate,
                days_until_restock=result.days_until_restock,
                suggested_order_quantity=result.suggested_order_quantity,
                status=result.status,
                urgency=STATUS_URGENCY[result.status],
                last_updated=position.last_updated,
                position=position,
            )
        )
    return rows


def status_counts(rows: Iterable[InventoryRow]) -> Dict[str, int]:
    """Number of rows per status, with every status present."""
    counts = Counter(row.status for row in rows)
    return {status: counts.get(status, 0) for status in STATUSES}
