"""Validation of inbound DART summary requests."""

from dataclasses import dataclass
from typing import Mapping, Optional

from .base import ConfigurationError, InvalidRequestError

DEFAULT_REPORT_TYPE = "11011"
DEFAULT_FS_DIV = "CFS"

REPORT_TYPES = {
    "11011": "사업보고서",
    "11012": "반기보고서",
    "11013": "1분기보고서",
    "11014": "3분기보고서",
}

FS_DIVISIONS = {
    "CFS": "연결재무제표",
    "OFS": "재무제표",
}


@dataclass(frozen=True)
class DartQuery:
    """A validated request, ready to be sent upstream."""
    api_key: str
    company: str
    year: str
    report_type: str = DEFAULT_REPORT_TYPE
    fs_div: str = DEFAULT_FS_DIV

    def describe(self) -> str:
        report = REPORT_TYPES.get(self.report_type, self.report_type)
        fs = FS_DIVISIONS.get(self.fs_div, self.fs_div)
        return f"{self.company} {self.year} {report} ({fs})"


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_request(params: Mapping[str, Optional[str]], api_key: Optional[str]) -> DartQuery:
    """
    Check the credential and caller parameters, applying defaults.

    Args:
        params: Caller parameters keyed company, year, reportType, fsDiv
        api_key: DART credential from process configuration

    Raises:
        ConfigurationError: no credential configured (checked first)
        InvalidRequestError: company or year missing or blank
    """
    if not _clean(api_key):
        raise ConfigurationError("DART_API_KEY is not configured")

    company = _clean(params.get("company"))
    year = _clean(params.get("year"))
    missing = [name for name, value in (("company", company), ("year", year)) if not value]
    if missing:
        raise InvalidRequestError(f"missing required parameter(s): {', '.join(missing)}")

    return DartQuery(
        api_key=_clean(api_key),
        company=company,
        year=year,
        report_type=_clean(params.get("reportType")) or DEFAULT_REPORT_TYPE,
        fs_div=_clean(params.get("fsDiv")) or DEFAULT_FS_DIV,
    )
