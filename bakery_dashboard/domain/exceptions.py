"""
도메인 계층 예외 정의

Every error the dashboard can raise derives from ``DomainError``. The UI
layer catches these and turns them into user-facing messages; none of them is
allowed to take down the aggregation/classification pipeline.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

Details = Union[str, Sequence[str], None]


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class MalformedRecord(DomainError):
    """
    A fetched record has no resolvable entity key, period or value.

    Raised by the normalizer for a single record. Callers that build views
    skip the record and keep going so a partial view is still shown.
    """

    def __init__(self, message: str, *, record: object = None) -> None:
        super().__init__(message)
        self.record = record


class ValidationError(DomainError):
    """
    데이터 검증 실패 시 발생하는 예외.

    Client-side input checks (edited quantity, restock threshold, forecast
    parameters). ``field`` names the input the message belongs to so the page
    can show it next to that input; no request is sent.
    """

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class FilterError(DomainError):
    """
    필터링/정렬 작업 실패 시 발생하는 예외.

    예: 존재하지 않는 정렬 컬럼
    """

    pass


class ApiError(DomainError):
    """Base class for failures talking to the backend."""

    def __init__(self, message: str, *, details: Details = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def detail_lines(self) -> list[str]:
        """Return ``details`` as a list of display lines."""
        if self.details is None:
            return []
        if isinstance(self.details, str):
            return [self.details] if self.details.strip() else []
        return [str(item) for item in self.details]


class TransportError(ApiError):
    """
    No response reached us: server down, wrong address, network or firewall.

    The message carries remediation steps instead of a raw traceback.
    """

    def __init__(self, message: str, *, base_url: Optional[str] = None) -> None:
        super().__init__(message)
        self.base_url = base_url


class ApplicationError(ApiError):
    """
    The server answered with a non-2xx status and an error envelope.

    Distinct from ``TransportError``: the server was reached and rejected
    the request. ``message`` and ``details`` are shown verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        details: Details = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status = status


class EditStateError(DomainError):
    """An inline-edit transition was requested from a state that forbids it."""

    pass
