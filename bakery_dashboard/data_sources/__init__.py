"""
데이터 소스 계층

HTTP access to the bakery backend and request-ordering helpers.
"""

from .api import BakeryApiClient, transport_error_message
from .gate import RequestGate

__all__ = [
    "BakeryApiClient",
    "RequestGate",
    "transport_error_message",
]
