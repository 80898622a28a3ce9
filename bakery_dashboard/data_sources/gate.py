"""
요청 순서 보장

When parameters change quickly, an older fetch may finish after a newer one.
Each fetch takes a token from a ``RequestGate`` before it starts and may only
commit its response if that token is still the newest one issued. The last
*issued* request wins, not the last one to complete.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RequestGate:
    """
    Monotonic request tokens for one data stream (e.g. the inventory list).

    Examples:
        >>> gate = RequestGate("inventory")
        >>> first = gate.begin()
        >>> second = gate.begin()
        >>> gate.accept(first)
        False
        >>> gate.accept(second)
        True
    """

    def __init__(self, name: str = "request") -> None:
        self.name = name
        self._latest = 0

    def begin(self) -> int:
        """Issue a new token; every earlier token becomes stale."""
        self._latest += 1
        return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def accept(self, token: int) -> bool:
        """Return whether a response for *token* may be committed."""
        if self.is_current(token):
            return True
        logger.info(
            f"Discarding stale {self.name} response (token {token}, latest {self._latest})"
        )
        return False

    def __repr__(self) -> str:
        return f"RequestGate({self.name!r}, latest={self._latest})"
