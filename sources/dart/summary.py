"""
Financial summary extraction from DART line items.

Each DART row carries the account name in ``account_nm`` and the current
period amount in ``thstrm_amount`` (a string, possibly comma-grouped).
Fields are resolved by plain substring match against ordered keyword
lists. The matching is deliberately naive: changing it changes reported
figures, so keep it exactly as is.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

NAME_FIELD = "account_nm"
VALUE_FIELD = "thstrm_amount"

# Output field -> candidate name fragments, tried in order
KEYWORD_RULES: Dict[str, List[str]] = {
    # Income statement
    "sales": ["매출액", "수익", "영업수익"],
    "operatingProfit": ["영업이익", "영업손익"],
    "netIncome": ["당기순이익", "당기순손익"],

    # Balance sheet
    "totalAssets": ["자산총계", "자산 총계"],
    "currentAssets": ["유동자산"],
    "nonCurrentAssets": ["비유동자산"],
    "totalLiabilities": ["부채총계", "부채 총계"],
    "currentLiabilities": ["유동부채"],
    "nonCurrentLiabilities": ["비유동부채"],
    "totalEquity": ["자본총계", "자본 총계"],

    # Cash flow statement
    "operatingCashFlow": ["영업활동현금흐름", "영업활동으로인한현금흐름"],
    "investingCashFlow": ["투자활동현금흐름", "투자활동으로인한현금흐름"],
    "financingCashFlow": ["재무활동현금흐름", "재무활동으로인한현금흐름"],
}

TWO_PLACES = Decimal("0.01")

# Optional sign, ASCII digits only (no "1_000", no full-width digits)
AMOUNT_RE = re.compile(r"[+-]?[0-9]+")


def parse_amount(raw) -> Optional[int]:
    """
    Parse a DART amount string into a signed integer.

    Thousands separators are removed first. Anything that is not a plain
    base-10 integer afterwards (blank, "-", decimals) gives None.

    >>> parse_amount("1,234,567")
    1234567
    >>> parse_amount("-500")
    -500
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).replace(",", "").strip()
    if not AMOUNT_RE.fullmatch(text):
        return None
    return int(text)


def find_item(items: Sequence[Mapping], keywords: Iterable[str]) -> Optional[Mapping]:
    """
    Return the first item whose name contains a keyword.

    Keywords are tried in order and the first keyword with any hit wins,
    even when a later keyword would hit an earlier item.
    """
    for keyword in keywords:
        for item in items:
            name = item.get(NAME_FIELD)
            if isinstance(name, str) and name and keyword in name:
                return item
    return None


def find_amount(items: Sequence[Mapping], keywords: Iterable[str]) -> Optional[int]:
    item = find_item(items, keywords)
    if item is None:
        return None
    return parse_amount(item.get(VALUE_FIELD))


def percentage(numerator: Optional[int], denominator: Optional[int]) -> Optional[str]:
    """numerator / denominator * 100 rounded half-up to 2 places, or None."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    ratio = Decimal(numerator) * 100 / Decimal(denominator)
    return str(ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def extract_summary(items: Optional[Sequence[Mapping]]) -> Dict[str, Optional[object]]:
    """
    Build the financial summary for one DART report.

    Args:
        items: DART ``list`` rows (may be None or empty)

    Returns:
        Dict with one signed int (or None) per KEYWORD_RULES field, plus
        ``debtRatio`` and ``roe`` as two-decimal strings (or None).
    """
    rows = [item for item in (items or []) if isinstance(item, Mapping)]
    summary: Dict[str, Optional[object]] = {
        field: find_amount(rows, keywords) for field, keywords in KEYWORD_RULES.items()
    }
    summary["debtRatio"] = percentage(summary["totalLiabilities"], summary["totalAssets"])
    summary["roe"] = percentage(summary["netIncome"], summary["totalEquity"])
    return summary
