"""
행 확장 상태 관리

Tracks which groups show their member records. The state is keyed by entity
key only, so it survives any filter or sort change: a row filtered out and
back in comes back still expanded.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional

from .models import CanonicalRecord, GroupSummary


class ExpansionState:
    """
    Set of expanded group keys.

    Examples:
        >>> state = ExpansionState()
        >>> state.toggle("BAGUETTE")
        True
        >>> state.is_expanded("BAGUETTE")
        True
    """

    def __init__(self, keys: Optional[Iterable[str]] = None) -> None:
        self._keys: set[str] = set(keys or ())

    def toggle(self, key: str) -> bool:
        """Flip *key* and return whether it is now expanded."""
        if key in self._keys:
            self._keys.discard(key)
            return False
        self._keys.add(key)
        return True

    def expand(self, key: str) -> None:
        self._keys.add(key)

    def collapse(self, key: str) -> None:
        self._keys.discard(key)

    def clear(self) -> None:
        self._keys.clear()

    def is_expanded(self, key: str) -> bool:
        return key in self._keys

    @property
    def expanded_keys(self) -> FrozenSet[str]:
        return frozenset(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._keys)!r})"


def chronological_members(summary: GroupSummary) -> List[CanonicalRecord]:
    """
    Member records oldest to newest, whatever order the parent table uses.

    Records sharing a period keep their arrival order.
    """
    return sorted(summary.members, key=lambda record: record.period)
