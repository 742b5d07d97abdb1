"""
Error taxonomy and status-code table for the DART Open API source.

https://opendart.fss.or.kr/guide/main.do
"""

from typing import Optional


SUCCESS_STATUS = "000"

# Upstream `status` codes reported verbatim to callers
STATUS_MESSAGES = {
    "010": "등록되지 않은 키입니다.",
    "011": "사용할 수 없는 키입니다.",
    "013": "조회된 데이터가 없습니다.",
    "020": "요청 제한을 초과하였습니다.",
    "100": "필수 파라미터가 누락되었습니다.",
    "800": "시스템 점검으로 인한 서비스가 중지 중입니다.",
    "900": "정의되지 않은 오류가 발생하였습니다.",
}

FALLBACK_MESSAGE = "데이터가 없습니다."


def describe_status(status: Optional[str], upstream_message: Optional[str] = None) -> str:
    """
    Human-readable message for a non-success upstream status.

    Known codes use the table above; anything else passes through the
    upstream's own message, or the generic fallback when it sent none.
    """
    if status in STATUS_MESSAGES:
        return STATUS_MESSAGES[status]
    if isinstance(upstream_message, str) and upstream_message:
        return upstream_message
    return FALLBACK_MESSAGE


class DartError(Exception):
    """Base exception for DART request handling."""
    pass


class ConfigurationError(DartError):
    """Raised when the server has no DART credential configured."""
    pass


class InvalidRequestError(DartError):
    """Raised when a caller omits a required parameter."""
    pass


class UpstreamError(DartError):
    """Base exception for failures attributed to the DART API."""
    pass


class UpstreamStatusError(UpstreamError):
    """Raised when DART answers with a status other than 000."""

    def __init__(self, status: Optional[str], upstream_message: Optional[str] = None):
        # DART sends strings; anything else is coerced so it can be echoed back
        self.status = None if status is None else str(status)
        self.upstream_message = upstream_message
        self.message = describe_status(self.status, upstream_message)
        super().__init__(f"DART status {status}: {self.message}")


class UpstreamTransportError(UpstreamError):
    """Raised when DART could not be reached or answered with a non-JSON body."""
    pass
