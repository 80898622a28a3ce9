"""
도메인 예외 → UI 에러 메시지 어댑터

Turns domain exceptions into user-facing notices. Pages wrap each action in
``handle_domain_errors`` so a failed fetch or save shows a dismissible
message while the tables keep rendering whatever data is already loaded.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generator, Optional, Tuple

import streamlit as st

from bakery_dashboard.domain.exceptions import (
    ApplicationError,
    DomainError,
    EditStateError,
    FilterError,
    MalformedRecord,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)

LEVEL_ERROR = "error"
LEVEL_WARNING = "warning"


@dataclass(frozen=True)
class ErrorNotice:
    """What the page shows for one failure."""

    title: str
    message: str
    details: Tuple[str, ...] = ()
    level: str = LEVEL_ERROR


def describe_error(exc: BaseException) -> ErrorNotice:
    """
    Map an exception to a notice.

    Transport failures carry remediation text; application errors are shown
    verbatim with their detail list.
    """
    if isinstance(exc, TransportError):
        return ErrorNotice("Cannot reach the backend", exc.message, tuple(exc.detail_lines()))

    if isinstance(exc, ApplicationError):
        return ErrorNotice(
            f"Request rejected (HTTP {exc.status})",
            exc.message,
            tuple(exc.detail_lines()),
        )

    if isinstance(exc, ValidationError):
        return ErrorNotice("Invalid input", str(exc), level=LEVEL_WARNING)

    if isinstance(exc, MalformedRecord):
        return ErrorNotice("Unexpected data from the backend", str(exc))

    if isinstance(exc, FilterError):
        return ErrorNotice("Filter or sort failed", str(exc), level=LEVEL_WARNING)

    if isinstance(exc, EditStateError):
        return ErrorNotice("Edit not possible", str(exc), level=LEVEL_WARNING)

    if isinstance(exc, DomainError):
        return ErrorNotice("Error", str(exc))

    return ErrorNotice(
        "Unexpected error",
        f"{type(exc).__name__}: {exc}",
    )


def render_notice(notice: ErrorNotice, *, dismiss_key: Optional[str] = None) -> bool:
    """
    Render a notice, optionally with a dismiss button.

    Returns:
        True when the dismiss button was clicked on this run
    """
    body = f"**{notice.title}**\n\n{notice.message}"
    if notice.details:
        body += "\n\n" + "\n".join(f"- {line}" for line in notice.details)

    if notice.level == LEVEL_WARNING:
        st.warning(body)
    else:
        st.error(body)

    if dismiss_key is None:
        return False
    return bool(st.button("Dismiss", key=dismiss_key))


@contextmanager
def handle_domain_errors(
    on_error: Optional[Callable[[ErrorNotice], None]] = None,
) -> Generator[None, None, None]:
    """
    도메인 예외를 잡아서 사용자 메시지로 변환하는 컨텍스트 매니저.

    Args:
        on_error: receives the notice (e.g. to store it in session state for
            a dismissible panel); without it the notice is rendered in place

    Examples:
        >>> with handle_domain_errors(on_error=lambda n: set_page_error("inventory", n)):
        ...     rows = client.get_inventory(lookback_days=30, lead_time_days=7)
    """
    try:
        yield

    except DomainError as exc:
        notice = describe_error(exc)
        logger.warning(f"{notice.title}: {notice.message}")
        if on_error is not None:
            on_error(notice)
        else:
            render_notice(notice)

    except Exception as exc:
        # 예상치 못한 예외: 상세 정보와 함께 표시
        logger.exception("Unexpected error while handling a dashboard action")
        notice = describe_error(exc)
        if on_error is not None:
            on_error(notice)
        else:
            render_notice(notice)
            st.exception(exc)
