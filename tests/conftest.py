"""Shared fixtures for the test suite."""

import pytest
from unittest.mock import MagicMock

from sources.dart.validator import DartQuery


@pytest.fixture
def mock_response():
    """Factory for mock HTTP responses."""
    def _make(status_code=200, json_data=None):
        resp = MagicMock()
        resp.status_code = status_code
        resp.json.return_value = json_data if json_data is not None else {}
        # truthy when status_code == 200
        resp.__bool__ = lambda self: self.status_code == 200
        return resp
    return _make


@pytest.fixture
def dart_query():
    return DartQuery(api_key="test-key", company="00126380", year="2023")


@pytest.fixture
def dart_item():
    """Factory fixture: one DART line item with the fields DART actually sends."""
    def _make(name, amount, **overrides):
        item = {
            "rcept_no": "20240312000736",
            "reprt_code": "11011",
            "bsns_year": "2023",
            "corp_code": "00126380",
            "sj_div": "BS",
            "sj_nm": "재무상태표",
            "account_id": "-표준계정코드 미사용-",
            "account_nm": name,
            "thstrm_nm": "제 55 기",
            "thstrm_amount": amount,
            "currency": "KRW",
        }
        item.update(overrides)
        return item
    return _make


@pytest.fixture
def sample_dart_items(dart_item):
    """A small but complete statement set (balance sheet, income, cash flow)."""
    return [
        dart_item("유동자산", "195,936,557,000,000"),
        dart_item("비유동자산", "259,969,423,000,000"),
        dart_item("자산총계", "455,905,980,000,000"),
        dart_item("유동부채", "75,719,452,000,000"),
        dart_item("비유동부채", "16,508,663,000,000"),
        dart_item("부채총계", "92,228,115,000,000"),
        dart_item("자본총계", "363,677,865,000,000"),
        dart_item("매출액", "258,935,494,000,000", sj_div="IS", sj_nm="손익계산서"),
        dart_item("영업이익", "6,566,976,000,000", sj_div="IS", sj_nm="손익계산서"),
        dart_item("당기순이익", "15,487,100,000,000", sj_div="IS", sj_nm="손익계산서"),
        dart_item("영업활동현금흐름", "44,137,427,000,000", sj_div="CF", sj_nm="현금흐름표"),
        dart_item("투자활동현금흐름", "-16,922,660,000,000", sj_div="CF", sj_nm="현금흐름표"),
        dart_item("재무활동현금흐름", "-8,593,434,000,000", sj_div="CF", sj_nm="현금흐름표"),
    ]


@pytest.fixture
def dart_payload(sample_dart_items):
    """Factory for a decoded DART response body."""
    def _make(status="000", message="정상", items=None, include_list=True):
        body = {"status": status, "message": message}
        if include_list:
            body["list"] = sample_dart_items if items is None else items
        return body
    return _make
