"""
DART (Data Analysis, Retrieval and Transfer System) Open API provider.

Fetches the full single-company financial statement for one fiscal year.
https://opendart.fss.or.kr/guide/detail.do?apiGrpCd=DS003&apiId=2019020

One attempt per call: no retry, no cache.
"""

import logging
from typing import Dict, List, Optional

from utils.session import DEFAULT_TIMEOUT, RequestSession

from .base import SUCCESS_STATUS, UpstreamStatusError, UpstreamTransportError
from .validator import DartQuery

logger = logging.getLogger(__name__)

BASE_URL = "https://opendart.fss.or.kr/api/fnlttSinglAcntAll.json"


class DartProvider:
    """Provider for DART single-company full financial statements."""

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.session = RequestSession(timeout=timeout)
        self.name = "DART"

    @staticmethod
    def build_params(query: DartQuery) -> Dict[str, str]:
        return {
            "crtfc_key": query.api_key,
            "corp_code": query.company,
            "bsns_year": query.year,
            "reprt_code": query.report_type,
            "fs_div": query.fs_div,
        }

    def fetch(self, query: DartQuery) -> Dict:
        """
        Call DART and return the decoded JSON body, whatever its status.

        Raises:
            UpstreamTransportError: request failed, HTTP error status,
                or the body is not a JSON object
        """
        logger.info(
            f"DART request: company={query.company} year={query.year} "
            f"reportType={query.report_type} fsDiv={query.fs_div}"
        )
        resp = self.session.get(self.base_url, params=self.build_params(query))
        if resp is None:
            raise UpstreamTransportError(f"Failed to reach DART: {self.session.last_error}")
        if not resp:
            raise UpstreamTransportError(f"DART returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamTransportError(f"DART returned a non-JSON body: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamTransportError("DART response body is not a JSON object")

        logger.info(f"DART response: status={data.get('status')} message={data.get('message')}")
        return data

    def get_financial_statements(self, query: DartQuery) -> List[Dict]:
        """
        Fetch the line items for a validated query.

        Returns:
            The DART ``list`` rows; empty when DART omits the list.

        Raises:
            UpstreamStatusError: DART status is not 000
            UpstreamTransportError: see fetch()
        """
        data = self.fetch(query)
        status = data.get("status")
        if status != SUCCESS_STATUS:
            raise UpstreamStatusError(status, data.get("message"))

        items = data.get("list")
        if not isinstance(items, list):
            return []
        rows = [item for item in items if isinstance(item, dict)]
        if len(rows) != len(items):
            logger.warning(f"Dropped {len(items) - len(rows)} non-object rows from DART list")
        return rows

    def close(self) -> None:
        self.session.close()
