"""
DART Financial Summary Runner

Fetches one company's financial statements from the DART Open API and
prints the condensed summary.

Usage:
    python -m sources.dart.pipeline --company 00126380 --year 2023
    python -m sources.dart.pipeline --company 00126380 --year 2023 --fs-div OFS
    python -m sources.dart.pipeline --company 00126380 --year 2023 --report-type 11012
    python -m sources.dart.pipeline --company 00126380 --year 2023 --json

Exit codes: 0 ok, 1 DART status error, 2 bad input or missing key, 3 transport failure.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
load_dotenv(os.path.join(Path(__file__).parent.parent.parent, ".env"))

from utils import log
from sources.dart.base import DartError, UpstreamStatusError, UpstreamTransportError
from sources.dart.provider import DartProvider
from sources.dart.summary import KEYWORD_RULES, extract_summary
from sources.dart.validator import validate_request

logger = log.setup_verbose_logging("sources.dart", filename="dart.log")

EXIT_OK = 0
EXIT_UPSTREAM_STATUS = 1
EXIT_INVALID = 2
EXIT_TRANSPORT = 3

LABELS = {
    "sales": "매출액",
    "operatingProfit": "영업이익",
    "netIncome": "당기순이익",
    "totalAssets": "자산총계",
    "currentAssets": "유동자산",
    "nonCurrentAssets": "비유동자산",
    "totalLiabilities": "부채총계",
    "currentLiabilities": "유동부채",
    "nonCurrentLiabilities": "비유동부채",
    "totalEquity": "자본총계",
    "operatingCashFlow": "영업활동현금흐름",
    "investingCashFlow": "투자활동현금흐름",
    "financingCashFlow": "재무활동현금흐름",
    "debtRatio": "부채비율 (%)",
    "roe": "ROE (%)",
}


def summary_rows(summary: Dict) -> List[Tuple[str, str]]:
    """Format a summary as (label, value) rows; missing values render as '-'."""
    rows = []
    for field in list(KEYWORD_RULES) + ["debtRatio", "roe"]:
        value = summary.get(field)
        if value is None:
            text = "-"
        elif isinstance(value, int):
            text = f"{value:,}"
        else:
            text = str(value)
        rows.append((LABELS.get(field, field), text))
    return rows


def run(
    company: str,
    year: str,
    report_type: Optional[str] = None,
    fs_div: Optional[str] = None,
    as_json: bool = False,
    api_key: Optional[str] = None,
) -> int:
    """Fetch and print one summary. Returns the process exit code."""
    params = {"company": company, "year": year, "reportType": report_type, "fsDiv": fs_div}
    try:
        query = validate_request(params, api_key=api_key if api_key is not None else os.getenv("DART_API_KEY", ""))
    except DartError as e:
        log.err(str(e))
        return EXIT_INVALID

    if not as_json:
        log.header(f"DART SUMMARY: {query.describe()}")

    provider = DartProvider()
    try:
        if not as_json:
            log.info(f"Using provider: {provider.name}")
            log.step("Requesting financial statements...")
        items = provider.get_financial_statements(query)
    except UpstreamStatusError as e:
        if as_json:
            print(json.dumps({
                "status": e.status,
                "message": e.message,
                "company_code": query.company,
                "year": query.year,
                "list": [],
            }, ensure_ascii=False, indent=2))
        else:
            log.warn(f"DART status {e.status}: {e.message}")
        return EXIT_UPSTREAM_STATUS
    except UpstreamTransportError as e:
        log.err(str(e))
        logger.exception(f"DART call failed for {query.describe()}")
        return EXIT_TRANSPORT
    finally:
        provider.close()

    summary = extract_summary(items)

    if as_json:
        print(json.dumps({
            "status": "000",
            "message": "정상 조회",
            "company_code": query.company,
            "year": query.year,
            "list": items,
            "summary": summary,
        }, ensure_ascii=False, indent=2))
        return EXIT_OK

    log.company_msg(query.company, f"{len(items)} line items")
    log.summary_table("Financial Summary", summary_rows(summary))
    log.ok("DART summary complete")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch a DART financial summary")
    parser.add_argument("--company", required=True, help="DART corp_code (e.g., 00126380)")
    parser.add_argument("--year", required=True, help="Business year (e.g., 2023)")
    parser.add_argument("--report-type", default=None, help="Report code (default: 11011 annual report)")
    parser.add_argument("--fs-div", default=None, help="CFS consolidated (default) or OFS separate")
    parser.add_argument("--json", action="store_true", help="Print the JSON envelope instead of a table")
    args = parser.parse_args(argv)

    return run(
        company=args.company,
        year=args.year,
        report_type=args.report_type,
        fs_div=args.fs_div,
        as_json=args.json,
    )


if __name__ == "__main__":
    sys.exit(main())
